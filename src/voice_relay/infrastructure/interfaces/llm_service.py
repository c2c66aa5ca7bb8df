"""Abstract interface for LLM service operations."""

from abc import ABC, abstractmethod


class LLMService(ABC):
    """Abstract base class for text-generation backends."""

    @abstractmethod
    def complete(self, prompt: str, model: str) -> str:
        """
        Sends a single prompt and returns the generated text.

        Args:
            prompt: The full prompt text.
            model: Provider model identifier.

        Returns:
            The generated text, often JSON-shaped but not guaranteed to be.

        Raises:
            AnalysisServiceError: If the LLM call fails.
        """
        pass
