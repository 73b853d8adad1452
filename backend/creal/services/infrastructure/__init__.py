"""
Infrastructure layer - storage, LLM access and parsing.

Subpackages:
    - storage: key-value substrate and the analysis cache store
    - llm: Gemini client
    - parsing: JSON recovery for model responses
"""
