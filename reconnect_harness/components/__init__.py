"""
Harness components.

- core/: Event names, payloads and session states
- connection/: Connection registry and uvicorn transport tracking
- metrics/: Counters and Prometheus exposition
"""
