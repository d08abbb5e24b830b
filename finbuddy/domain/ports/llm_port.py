"""
Port (interface) for text-generation providers.
Infrastructure adapters (e.g. BedrockTextGenerator) must implement this interface.
"""

from abc import ABC, abstractmethod


class ITextGenerator(ABC):
    @abstractmethod
    def generate_text(self, prompt: str) -> str:
        """Send a fully formatted prompt to the model and return its raw text."""
        ...
