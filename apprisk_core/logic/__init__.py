"""
Core logic: domain models and the services that orchestrate the evaluators.
"""
