"""
Generation model adapters.

Dependencies: langchain_google_genai
System role: LLM adapter layer
"""

from newsbot.core.generation.gemini_generator import GeminiGenerator

__all__ = ["GeminiGenerator"]
