"""v1 router package — all /api/v1/* endpoints live here.

Files:
  deps.py         — bearer auth, admin guard, shared soft-delete lifecycle routes
  auth.py         — login and e-mail OTP
  users.py        — users and roles
  regions.py      — provinces and cities
  commodities.py  — commodities
  lands.py        — lands and land commodities
  market.py       — prices (with history + Excel reports), supplies, demands
  harvests.py     — harvests (with Excel reports) and sales

Rule: Routers only handle HTTP (request parsing, response shaping).
      All business logic delegates to superfarmer/services/.
"""
