"""Pydantic schemas package.

Folder intent:
  common.py     — CamelModel base, TimestampedOut, HealthResponse (all schemas inherit CamelModel)
  identity.py   — users, roles, login and OTP payloads
  region.py     — provinces and cities
  commodity.py  — commodities
  land.py       — lands and land commodities
  market.py     — prices, supplies, demands
  harvest.py    — harvests and sales
  report.py     — report request messages published to RabbitMQ
"""
