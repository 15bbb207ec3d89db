"""
Service layer: business logic between the HTTP routers and the core stores
"""
