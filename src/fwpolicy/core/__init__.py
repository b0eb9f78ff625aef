"""
fwpolicy.core — policy sync logic and shared infrastructure.

Modules:
    config      Configuration loading (TOML + env vars)
    constants   Exit codes, filesystem layout, policy kinds
    exceptions  fwpolicy exception hierarchy
    logging     stdlib logging configuration
    policy      Resolver, operator, and batch driver
"""
