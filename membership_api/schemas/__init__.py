"""
Membership API - Pydantic Request/Response Schemas
==================================================

What:  The API contract for members and courses. Wire names are camelCase
       (membershipType, instructorName, ...); Python attributes are snake_case.
"""
