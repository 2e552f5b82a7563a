# meshkit

Small helpers for programs that manage Kubernetes clusters and service meshes.

| Module | What it offers |
| --- | --- |
| `meshkit.errors` | `MeshkitError` (code, `Severity`, short and long descriptions, probable causes, suggested remediations) |
| `meshkit.versions` | `sort_dotted_strings_by_digits` for version-like strings |
| `meshkit.svg` | `update_svg_string` sets width and height on `<svg>` elements |
| `meshkit.template` | `merge_to_template` fills `{{.field}}` templates, HTML-escaping values |
| `meshkit.store` | `ThreadSafeStore`, a string-keyed store guarded by a lock |
| `meshkit.network` | `HostPort`, `Endpoint`, `MockOptions` and `tcp_check` |
| `meshkit.archive` | `is_zip`, `is_tar_gz`, `is_yaml`, `extract_zip`, `extract_tar_gz`, `process_content` |
| `meshkit.kube.errors` | error constructors for the Kubernetes helpers |
| `meshkit.kube.service` | `get_endpoint` and `get_service_endpoint` for service discovery |
| `meshkit.kube.kubeconfig` | `load_kubeconfig`, `current_context`, `is_crd`, `custom_resources_from_list`, `gvr_for_custom_resource` |
| `meshkit.kube.describe` | `DescribeType`, `GroupKind`, `DescriberOptions`, `group_kind_for` |
| `meshkit.kube.expose` | `build_service_for_object` and friends: Service manifests that expose workloads |
| `meshkit.kube.expose_errors` | error constructors for exposing workloads |
| `meshkit.manifests.readable` | `format_to_readable_string`, `deformat_readable_string`, `remove_helm_templating_from_crd`, `remove_non_crd_values`, `OpenApiRefResolver` |
| `meshkit.kompose` | `validate_compose_file`, `version_check`, `format_compose_file` |

## Installation

```
pip install meshkit
```

To run the test suite:

```
pip install "meshkit[test]"
pytest
```

## Examples

Sort versions (`alpha < beta < rc <` plain release `< stable`):

```python
from meshkit.versions import sort_dotted_strings_by_digits

sort_dotted_strings_by_digits(["v1.12.0-rc.1", "1.12.0-beta.2", "1.12.0-beta.1"])
# ['1.12.0-beta.1', '1.12.0-beta.2', 'v1.12.0-rc.1']
```

Fill a template; the result is bytes, and missing keys render empty:

```python
from meshkit.template import merge_to_template

merge_to_template(b"{{.namespace}}", {"namespace": "meshery"})
# b'meshery'
```

Resize an SVG. Unless the last argument is true, the result starts with
`XML_HEADER`; a malformed document raises `ValueError`:

```python
from meshkit.svg import update_svg_string

resized = update_svg_string(svg_text, 64, 64, False)
```

Readable titles for resource kinds:

```python
from meshkit.manifests.readable import format_to_readable_string

format_to_readable_string("APIService")         # 'API Service'
format_to_readable_string("IPFamiliesWithIPs")  # 'IP Families With IPs'
```

Share values between threads:

```python
from meshkit.store import ThreadSafeStore

store = ThreadSafeStore()
store.set("cluster", "kind-local")
store.get("cluster", None)   # 'kind-local'
"cluster" in store           # True
store.delete("cluster")
```

Find where a service can be reached. `service` is a
`meshkit.kube.service.Service`; with `MockOptions` set, only its
`desired_endpoint` counts as reachable and no connection is made:

```python
from meshkit.kube.service import ServiceOptions, get_endpoint

endpoint = get_endpoint(ServiceOptions(port_selector="http"), service)
print(endpoint.internal, endpoint.external)
```

`get_service_endpoint(client, options)` does the same after fetching the
service through any object with a `get_service(namespace, name)` method.

Build a Service manifest that exposes a workload given as a decoded manifest:

```python
from meshkit.kube.expose import ExposeConfig, build_service_for_object

pod = {
    "apiVersion": "v1",
    "kind": "Pod",
    "metadata": {"name": "web", "namespace": "demo", "labels": {"app": "web"}},
    "spec": {"containers": [{"name": "web", "ports": [{"containerPort": 8080}]}]},
}
service = build_service_for_object(pod, ExposeConfig(name="web"))
# service["spec"] == {"ports": [{"protocol": "TCP", "port": 8080, "targetPort": 8080}],
#                     "selector": {"app": "web"}}
```

Check a docker compose file before conversion:

```python
from meshkit.kompose import format_compose_file, version_check

compose = b'version: "3.8"\nservices: {}\n'
version_check(compose)        # raises MeshkitError if the version is missing or above 3.9
format_compose_file(compose)  # b"version: '3.8'\n"
```

## Errors

Errors raised by the package's checks are `MeshkitError` instances (other
failures use `ValueError`, `OSError`, `LookupError` or `ArchiveError` as each
function documents). `str(exc)` gives the short description; the code and the
other details are attributes:

```python
from meshkit.errors import MeshkitError

try:
    endpoint = get_endpoint(options, service)
except MeshkitError as exc:
    print(exc.code, exc, exc.suggested_remediation)
```

## What the package does not do

- It does not connect to a Kubernetes cluster. Services are discovered from
  objects you pass in, `build_service_for_object` returns a manifest without
  creating it, and `meshkit.kube.describe` only maps resource types to their
  group and kind; it produces no descriptions.
- It does not turn CRDs into component definitions or schemas; for CRDs it
  offers only detection, group/version/resource lookup, template clean-up,
  readable titles and `$ref` resolution.
- It does not convert compose files into Kubernetes manifests; it validates
  them and checks their version.
- It has no command-line interface.