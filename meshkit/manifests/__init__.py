"""Readable names for schema fields, CRD clean-up and OpenAPI reference resolution."""