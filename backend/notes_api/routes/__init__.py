"""
Notes API — API Routes Package
===============================

Route Inventory:
    - notes.py:   GET    /notes             (list, newest first)
                  POST   /notes             (create)
                  GET    /notes/{id}        (get)
                  PUT    /notes/{id}        (update)
                  DELETE /notes/{id}        (delete)
    - health.py:  GET    /health            (liveness check)

Routes stay thin: extract request data, call NoteService, pick the status code.
"""
