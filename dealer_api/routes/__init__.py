# Routes package init
"""
Dealerships API — Routes Package
==================================

Route Inventory:
    - health.py:       GET  /                           (welcome text)
                       GET  /health                     (service health check)
    - reviews.py:      GET  /fetchReviews               (all reviews)
                       GET  /fetchReviews/dealer/{id}   (reviews of one dealer)
                       POST /insert_review              (store a new review)
    - dealerships.py:  GET  /fetchDealers               (all dealerships)
                       GET  /fetchDealers/{state}       (dealerships of one state)
                       GET  /fetchDealer/{id}           (one dealership)

Design Principle:
    Routes are THIN: parse the request, make one repository call, return the
    result. Status codes for failures come from the global exception
    handlers in main.py, never from try/except in a route.
"""
