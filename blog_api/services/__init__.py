# Services package init
"""
Blog API — Services Layer
===========================

Service Inventory:
    - PostService: Document store adapter for blog posts (one MongoDB call per operation)

Services receive the database handle per call and hold no connection of
their own, so they can be tested with a mocked handle.
"""
