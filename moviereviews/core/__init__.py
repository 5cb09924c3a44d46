"""
Core operation handlers and the error taxonomy.

Each handler module maps API operations onto the persistence layer,
applying the authentication, existence, ownership and validation checks
in a fixed order.
"""
