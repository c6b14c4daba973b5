# Path: core/providers/__init__.py
# Purpose: Package initializer for hosted inference clients.
# Layer: core/providers.
# Details: Exposes the Hugging Face router client.

from .huggingface import HuggingFaceClient

__all__ = ["HuggingFaceClient"]
