"""
Knowledge RAG core.

Ingests source documents into chunked, embedded knowledge items and serves
semantic queries against them.
"""
