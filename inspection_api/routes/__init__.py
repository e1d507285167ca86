# Routes package init
"""
Inspection Data API — Routes Package
=====================================

Route Inventory:
    - inspection_data.py:  GET /InspectionData                       (paged list)
                           GET /InspectionData/id/{id}               (by internal id)
                           GET /InspectionData/{inspection_id}       (by inspection id)
                           GET /InspectionData/{inspection_id}/inspection-data-storage-location
    - health.py:           GET /health                               (service health check)

Routes stay thin: extract request data, check the caller's role, call the
inspection data service, shape the response.
"""
