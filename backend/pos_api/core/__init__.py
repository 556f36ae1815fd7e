"""
Application wiring: dependencies, error mapping, lifespan, CORS, middlewares.
"""
