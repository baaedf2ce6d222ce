# Services package init
"""
User Records Service — Services Layer
======================================

What:  Business logic layer sitting between routes (HTTP) and the document store.
How:   Services receive the collection per call, apply the operation's rules,
       and return models or raise UserServiceError subclasses.

Service Inventory:
    - UserService: create / get / list / update / delete of user records
"""
