"""
Service layer.

``resource_repository`` is the only module that talks to the store; the
swap calculator and the summation helpers are pure apart from the price
feed fetch.
"""
