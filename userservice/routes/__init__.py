# Routes package init
"""
User Records Service — API Routes Package
==========================================

Route Inventory:
    - users.py:   POST   /users              (create)
                  GET    /users              (list all)
                  GET    /users/{id}         (get one)
                  PUT    /users/{id}         (merge update)
                  DELETE /users/{id}         (delete)
    - health.py:  GET    /health             (service health check)

Routes are THIN: they take the collection and service from Depends(),
call the service, and shape the response. Store logic lives in services.
"""
