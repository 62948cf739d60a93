"""
Core pipeline logic: exceptions, extraction, chunking and embedding.
"""
