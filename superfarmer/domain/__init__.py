"""Domain package — all ORM models are imported here so Alembic autogenerate detects them.

Folder intent:
  role.py       — Roles (Admin / Farmer seeded)
  user.py       — Registered users
  region.py     — Provinces and cities
  commodity.py  — Tradable commodities
  land.py       — Lands and the commodities planted on them
  price.py      — Current prices and price history
  market.py     — Supply / demand and their histories
  harvest.py    — Harvest records per land commodity
  sale.py       — Sales
  mixins.py     — Shared TimestampMixin, UUIDMixin, CommodityCityMixin
"""

from superfarmer.domain.commodity import Commodity
from superfarmer.domain.harvest import Harvest
from superfarmer.domain.land import Land, LandCommodity
from superfarmer.domain.market import Demand, DemandHistory, Supply, SupplyHistory
from superfarmer.domain.price import Price, PriceHistory
from superfarmer.domain.region import City, Province
from superfarmer.domain.role import Role
from superfarmer.domain.sale import Sale
from superfarmer.domain.user import User

__all__ = [
    "City",
    "Commodity",
    "Demand",
    "DemandHistory",
    "Harvest",
    "Land",
    "LandCommodity",
    "Price",
    "PriceHistory",
    "Province",
    "Role",
    "Sale",
    "Supply",
    "SupplyHistory",
    "User",
]
