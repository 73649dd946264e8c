"""
Domain layer - custom object types and reconciliation.

This layer holds the custom object value types and the reconciler that keeps
a declared object in line with the store, serializing work per resource.
"""
