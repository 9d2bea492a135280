"""
Service layer abstraction.

Services encapsulate business logic.  ``UserStore`` keeps users in
memory; swapping it for a database-backed implementation would not
require changes to the API handlers.
"""
