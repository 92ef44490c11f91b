"""
Domain package for the CEP Service.

Contains the provider independent address model and the lookup result
exchanged between the lookup service and the HTTP layer.
"""
