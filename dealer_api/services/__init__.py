# Services package init
"""
Dealerships API — Services Layer

Service Inventory:
    - seed_service: SeedLoader (reads the JSON seed files) and
      DatabaseInitializer (clears and reseeds both collections at startup)
"""
