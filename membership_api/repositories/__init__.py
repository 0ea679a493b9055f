"""
Membership API - Repositories
=============================

What:  Record access between routes (HTTP) and the database.

Inventory:
    - RecordRepository (base.py): shared list/get/create/update/delete
    - MemberRepository (members.py): `members` table
    - CourseRepository (courses.py): `courses` table
    - build_search_filter (search.py): literal, case-insensitive name search

Repositories are stateless; the AsyncSession is passed into every call.
"""
