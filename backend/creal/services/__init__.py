"""
Services package - Core business logic and integrations

Organized by domain responsibility:

Orchestration:
    - orchestration: cache-or-compute analysis coordinator and message router

Remote work:
    - analysis: Gemini bias analyzer, author lookup, prompt templates
    - video: Veo long-running operation client and response shape resolver

Infrastructure (Technical Concerns):
    - infrastructure/storage: key-value substrate and analysis cache
    - infrastructure/llm: Gemini client
    - infrastructure/parsing: JSON recovery for model responses

Architecture Principles:
    - Dependency Injection: every component receives its collaborators
    - Async-first: all I/O uses async/await on one event loop
"""
