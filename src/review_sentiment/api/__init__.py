"""
FastAPI presentation adapter.

Components:
- routes: HTTP endpoints (health, session, analyze, events, credential)
- models: Request/response schemas
- dependencies: Singleton controller, event log and credential store
- error_handlers: Domain exception -> HTTP status mapping
- middleware: Request ID tracing
"""
