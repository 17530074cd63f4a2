"""Token counting and estimation utilities."""

import tiktoken
from typing import Dict, Iterable


class TokenCounter:
    """Estimates request size for the analysis model."""
    
    def __init__(self, encoding_name: str = "cl100k_base"):
        """Initialize with specified encoding."""
        try:
            self.encoding = tiktoken.get_encoding(encoding_name)
        except Exception:
            # Fallback to simple character-based estimation
            self.encoding = None
    
    def count_tokens(self, text: str) -> int:
        """Count tokens in a text string."""
        if not text:
            return 0
        if self.encoding:
            return len(self.encoding.encode(text))
        else:
            # Fallback estimation: roughly 4 characters per token
            return len(text) // 4
    
    def count_message_tokens(self, messages: Iterable[str], overhead_per_message: int = 4) -> int:
        """Count tokens for a chat request made of several messages."""
        total = 0
        for content in messages:
            total += self.count_tokens(content) + overhead_per_message
        return total
    
    def estimate_cost(
        self,
        input_tokens: int,
        output_tokens: int,
        input_cost_per_1k: float = 0.005,
        output_cost_per_1k: float = 0.015
    ) -> Dict[str, float]:
        """Estimate cost for a single analysis request."""
        input_cost = (input_tokens / 1000) * input_cost_per_1k
        output_cost = (output_tokens / 1000) * output_cost_per_1k
        return {
            "input_tokens": input_tokens,
            "output_tokens": output_tokens,
            "estimated_cost_usd": round(input_cost + output_cost, 4)
        }
