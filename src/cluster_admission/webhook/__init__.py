"""Validating admission webhook for cluster objects."""
