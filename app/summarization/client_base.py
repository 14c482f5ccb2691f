from abc import ABC, abstractmethod

from app.summarization.models import ModelOutput


class BaseSummaryClient(ABC):
    """Contract for provider-specific generative model clients."""

    @abstractmethod
    def generate(
        self,
        *,
        model: str,
        prompt: str,
        temperature: float,
        max_output_tokens: int,
    ) -> ModelOutput:
        """Issue exactly one generation request, asking for a JSON response.

        Raises:
            TransportError: non-OK status, network failure or timeout.
            ModelBlockedError: no candidates returned or content blocked.
        """
