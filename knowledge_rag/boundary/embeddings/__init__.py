"""
Embedding provider clients.

Exports:
  - EmbeddingClient, EmbeddingResult: Provider contract and its return value
  - OpenAIEmbeddingClient: OpenAI (and OpenAI-compatible) embeddings API
  - BedrockEmbeddingClient: Amazon Bedrock Titan text embeddings
  - create_embedding_client: Provider selection from EmbeddingSettings
"""

from knowledge_rag.boundary.embeddings.base import EmbeddingClient, EmbeddingResult
from knowledge_rag.boundary.embeddings.openai_client import OpenAIEmbeddingClient
from knowledge_rag.boundary.embeddings.bedrock_client import BedrockEmbeddingClient
from knowledge_rag.boundary.embeddings.factory import create_embedding_client

__all__ = [
    "EmbeddingClient",
    "EmbeddingResult",
    "OpenAIEmbeddingClient",
    "BedrockEmbeddingClient",
    "create_embedding_client",
]
