"""Kubernetes helpers: service discovery, kubeconfig and CRDs, describable kinds and Service generation."""