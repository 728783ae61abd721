"""
Feature modules for the Tessera accounts service.

Each module is self-contained with its own:
- interfaces.py: Protocol definitions for the module's public API
- models.py: Pydantic models for data transfer
- exceptions.py: Module-specific exceptions
- the implementation (repository.py, service.py, ...)

Modules communicate through interfaces, not concrete implementations.
"""
