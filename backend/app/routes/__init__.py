# Routes package init
"""
Trainer API Backend: API Routes Package
========================================

What:  HTTP route handlers that accept requests and return JSON envelopes.

Route Inventory:
    - trainers.py:  GET    /trainers
                    GET    /trainer/{name}
                    POST   /trainer
                    DELETE /trainers
    - health.py:    GET    /health

Design Principle:
    Routes stay thin: bind the input, call the repository, wrap the result.
    Errors are raised and rendered by the global handlers in main.py.
"""
