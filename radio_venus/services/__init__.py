"""Domain services: calculation, classification, resolution, merge and review.

Import services from their modules directly; this package does not
re-export them so provider modules can depend on individual services
without import cycles.
"""
