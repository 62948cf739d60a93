"""
Boundary layer: relational store, stored-file accessors and embedding providers.
"""
