# Services package init
"""
Inspection Data API — Services Layer
=====================================

Service Inventory:
    - InspectionDataService (abstract): Read contract used by the routes
    - PagedList: Ordered page of records plus page bookkeeping
    - SqlInspectionDataService: Default implementation over async SQLAlchemy
"""
