"""Generation and speech provider implementations.

Queue-backed video providers follow the same pattern:
  POST create job → poll status → fetch result → persist to storage
Speech providers are single request/response calls.
"""
