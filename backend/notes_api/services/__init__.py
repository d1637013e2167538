"""
Notes API — Services Layer
===========================

What:  Business logic between routes (HTTP) and database (persistence).

Service Inventory:
    - NoteService: title validation, the CRUD statements, and translation of
      missing rows and store failures into application exceptions
"""
