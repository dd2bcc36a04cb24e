from sqlmodel import Field, SQLModel


class Tenant(SQLModel, table=True):
    __tablename__ = "tenants"
    id: str = Field(primary_key=True)
    name: str
    timezone: str = "UTC"  # IANA zone name, e.g. "Europe/Warsaw"


class Staff(SQLModel, table=True):
    __tablename__ = "staff"
    id: str = Field(primary_key=True)
    tenant_id: str = Field(foreign_key="tenants.id", index=True)
    first_name: str
    last_name: str = ""
    is_active: bool = True

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()
