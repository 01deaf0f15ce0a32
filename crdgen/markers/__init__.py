"""CRD-level and schema validation markers."""