"""
Application layer: services coordinating the pipeline and the store.
"""
