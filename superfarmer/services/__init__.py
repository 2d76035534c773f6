"""Services package — all business logic lives here, never in routers.

Files:
  base.py       — CrudService: the soft-delete lifecycle + cached listing every service shares
  identity.py   — users, roles, login and OTP
  region.py     — provinces and cities
  commodity.py  — commodities
  land.py       — lands and land commodities (area bookkeeping)
  market.py     — prices, supplies, demands with history-on-update
  harvest.py    — harvests (and their reports) and sales

Rule: routers call services, services call repositories, repositories call the DB.
      No SQLAlchemy queries in routers. No FastAPI imports in services.
"""
