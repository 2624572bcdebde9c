from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class TableDefinition:
    """A table the bookkeeping app needs, with the DDL that creates it."""

    name: str
    create_sql: str

    def create_if_not_exists_sql(self) -> str:
        return self.create_sql.replace("CREATE TABLE ", "CREATE TABLE IF NOT EXISTS ", 1)


@dataclass(frozen=True)
class SeedUser:
    """A default operator account created on first setup."""

    username: str
    full_name: str
    role: str
    password: str


_TIMESTAMP_DEFAULT = "TIMESTAMP WITH TIME ZONE DEFAULT TIMEZONE('utc'::text, NOW())"


USERS_TABLE = TableDefinition(
    name="users",
    create_sql=f"""CREATE TABLE users (
  id BIGSERIAL PRIMARY KEY,
  username VARCHAR(50) UNIQUE NOT NULL,
  full_name VARCHAR(100) NOT NULL,
  role VARCHAR(20) NOT NULL,
  password_hash VARCHAR(255) NOT NULL,
  is_active BOOLEAN DEFAULT true,
  created_at {_TIMESTAMP_DEFAULT},
  updated_at {_TIMESTAMP_DEFAULT}
);""",
)

EXPENSES_TABLE = TableDefinition(
    name="expenses",
    create_sql=f"""CREATE TABLE expenses (
  id BIGSERIAL PRIMARY KEY,
  month VARCHAR(20) NOT NULL,
  entry_no VARCHAR(10),
  member_name VARCHAR(100),
  expense_date VARCHAR(20),
  purpose VARCHAR(200),
  quantity VARCHAR(10),
  amount DECIMAL(10,2),
  source_of_fund VARCHAR(50),
  created_at {_TIMESTAMP_DEFAULT},
  updated_at {_TIMESTAMP_DEFAULT},
  created_by VARCHAR(50)
);""",
)

PENALTIES_TABLE = TableDefinition(
    name="penalties",
    create_sql=f"""CREATE TABLE penalties (
  id BIGSERIAL PRIMARY KEY,
  month VARCHAR(20) NOT NULL,
  entry_no VARCHAR(10),
  member_name VARCHAR(100),
  penalty_date VARCHAR(20),
  penalty_type VARCHAR(50),
  amount DECIMAL(10,2),
  signature VARCHAR(50),
  secretary_remark TEXT,
  is_paid BOOLEAN DEFAULT false,
  created_at {_TIMESTAMP_DEFAULT},
  updated_at {_TIMESTAMP_DEFAULT}
);""",
)

MONTHLY_COLLECTIONS_TABLE = TableDefinition(
    name="monthly_collections",
    create_sql=f"""CREATE TABLE monthly_collections (
  id BIGSERIAL PRIMARY KEY,
  month VARCHAR(20) NOT NULL,
  entry_no VARCHAR(10),
  member_name VARCHAR(100),
  collection_date VARCHAR(20),
  collection_type VARCHAR(10),
  amount DECIMAL(10,2),
  signature VARCHAR(50),
  secretary_remark TEXT,
  is_paid BOOLEAN DEFAULT false,
  created_at {_TIMESTAMP_DEFAULT},
  updated_at {_TIMESTAMP_DEFAULT}
);""",
)

# users must come first; the other tables are listed in creation order.
DEFAULT_TABLES: tuple[TableDefinition, ...] = (
    USERS_TABLE,
    EXPENSES_TABLE,
    PENALTIES_TABLE,
    MONTHLY_COLLECTIONS_TABLE,
)

DEFAULT_USERS: tuple[SeedUser, ...] = (
    SeedUser(username="jayvee", full_name="JAYVEE CARINGAL", role="admin", password="ADMIN01"),
    SeedUser(username="marjhon", full_name="MAR JHON LUYAO", role="secretary", password="SECMJ"),
    SeedUser(username="christian", full_name="CHRISTIAN LASPONIA", role="treasurer", password="TREASCL"),
    SeedUser(username="princess", full_name="PRINCESS PADILLA", role="vicepresident", password="VPRESPL"),
    SeedUser(username="guest", full_name="Guest User", role="guest", password="GUEST123"),
)

# Role tag -> label used in the printed credentials.
ROLE_LABELS: dict[str, str] = {
    "admin": "Admin",
    "secretary": "Secretary",
    "treasurer": "Treasurer",
    "vicepresident": "Vice President",
    "guest": "Guest",
}
