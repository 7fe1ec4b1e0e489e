"""Cluster Admission package.

Admission-time validation for multi-role node clusters:
- models: Pydantic data models for cluster objects and admission reviews
- validation: field errors, quorum calculation and cluster/node pool validators
- config: Configuration management
- observability: Structured logging
- webhook: Validating admission webhook service
"""

__version__ = "0.1.0"
