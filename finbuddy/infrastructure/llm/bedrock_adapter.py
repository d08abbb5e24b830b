"""
Infrastructure adapter: Amazon Bedrock (ChatBedrock) → ITextGenerator.

All ChatBedrock / langchain_aws details are confined here. The rest of the
codebase only sees generate_text(prompt) -> str.
"""

import os
from typing import Any, Optional

from langchain_aws import ChatBedrock
from langchain_core.messages import HumanMessage

from finbuddy.domain.ports.llm_port import ITextGenerator


class BedrockTextGenerator(ITextGenerator):
    """Wraps ChatBedrock and exposes the ITextGenerator interface."""

    MODEL_ID = "us.amazon.nova-pro-v1:0"
    MAX_TOKENS = 500
    TEMPERATURE = 0.7

    def __init__(
        self,
        model_id: Optional[str] = None,
        region: Optional[str] = None,
        max_tokens: Optional[int] = None,
        temperature: Optional[float] = None,
        _runnable: Any = None,
    ) -> None:
        """
        Args:
            model_id:    Bedrock model or inference-profile id.
            region:      AWS region; defaults to AWS_DEFAULT_REGION.
            max_tokens:  Output token ceiling.
            temperature: Sampling temperature.
            _runnable:   Optional pre-configured Runnable (used by tests to
                         avoid constructing ChatBedrock).
        """
        if _runnable is not None:
            self._llm = _runnable
        else:
            self._llm = ChatBedrock(
                model=model_id or self.MODEL_ID,
                temperature=self.TEMPERATURE if temperature is None else temperature,
                max_tokens=max_tokens or self.MAX_TOKENS,
                region_name=region or os.environ.get("AWS_DEFAULT_REGION", "us-east-1"),
            )

    def generate_text(self, prompt: str) -> str:
        response = self._llm.invoke([HumanMessage(content=prompt)])
        return self._content_to_text(getattr(response, "content", response))

    @staticmethod
    def _content_to_text(content: Any) -> str:
        """Flatten LangChain message content (str or list of blocks) to plain text."""
        if isinstance(content, str):
            return content
        if isinstance(content, list):
            parts = []
            for block in content:
                if isinstance(block, str):
                    parts.append(block)
                elif isinstance(block, dict) and block.get("type") == "text":
                    parts.append(block.get("text", ""))
            return "".join(parts)
        return str(content or "")
