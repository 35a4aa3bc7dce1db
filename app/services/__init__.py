"""
Services package for business logic.

Modules are imported directly (app.services.lifecycle, app.services.sync, ...)
to keep the models -> services import graph acyclic.
"""
