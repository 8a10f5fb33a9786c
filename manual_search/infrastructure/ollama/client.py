from __future__ import annotations

from typing import List
import requests

from ...domain.errors import EmbeddingError
from ...domain.interfaces import EmbeddingService
from ...domain.models import Vector
from ..timeouts import http_timeout_seconds
from ..config import ollama_url, embed_model


class OllamaEmbeddingService(EmbeddingService):
    """Embedding adapter for Ollama /api/embeddings."""

    def embed_texts(self, texts: List[str]) -> List[Vector]:
        if not texts:
            return []
        base = ollama_url()
        url = f"{base}/api/embeddings"
        timeout = http_timeout_seconds()
        model = embed_model()
        out: List[Vector] = []
        for t in texts:
            r = requests.post(url, json={"model": model, "prompt": t}, timeout=timeout)
            r.raise_for_status()
            data = r.json() or {}
            raw = data.get("embedding")
            if not isinstance(raw, list) or not raw:
                raise EmbeddingError(f"Ollama returned no embedding for model '{model}'")
            values = [float(x) for x in raw]
            out.append(Vector(values=values, dim=len(values)))
        return out

    def get_dimension(self) -> int:
        vecs = self.embed_texts(["probe"])
        if not vecs:
            raise EmbeddingError("Embedding dimension probe failed (no vectors)")
        return vecs[0].dim
