"""
Membership API - Routes Package
===============================

Route Inventory:
    - health.py:   GET /, GET /health
    - members.py:  /members collection and /members/{id}
    - courses.py:  /courses collection and /courses/{id}
    - common.py:   shared OpenAPI responses and the missing-record policy

Routes are thin: extract request data, call one repository method, return
the result. Error translation lives in the global exception handlers.
"""
