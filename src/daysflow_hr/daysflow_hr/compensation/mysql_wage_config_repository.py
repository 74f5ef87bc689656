from __future__ import annotations

import json
from decimal import Decimal
from typing import Optional

from ..core.enums import WageBasis
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone
from .model import DEFAULT_WAGE_CONFIG, WageConfig
from .repository import WageConfigRepository


def _component(components: dict, key: str, default: Decimal) -> Decimal:
    value = components.get(key)
    if value is None:
        return default
    return Decimal(str(value))


class MySQLWageConfigRepository(WageConfigRepository):
    def __init__(self, conn_factory: DatabaseConnection, *, defaults: WageConfig = DEFAULT_WAGE_CONFIG):
        self._conn_factory = conn_factory
        self._defaults = defaults

    def get_for_employee(self, employee_id: int) -> Optional[WageConfig]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT employee_id, wage_type, wage, working_days, break_time, components
                FROM salary_details
                WHERE employee_id=%s
                """,
                (int(employee_id),),
            )
            r = fetchone(cur)
            if not r:
                return None

            comps = r.get("components") or {}
            if isinstance(comps, (str, bytes)):
                comps = json.loads(comps)

            d = self._defaults
            return WageConfig(
                wage_basis=WageBasis(r.get("wage_type") or d.wage_basis.value),
                gross_wage=Decimal(str(r.get("wage") or 0)),
                working_days_per_week=int(r.get("working_days") or d.working_days_per_week),
                daily_break_hours=Decimal(str(r.get("break_time") if r.get("break_time") is not None else d.daily_break_hours)),
                basic_percent=_component(comps, "basicPercent", d.basic_percent),
                hra_percent=_component(comps, "hraPercent", d.hra_percent),
                standard_allowance_amount=_component(comps, "standardAmount", d.standard_allowance_amount),
                bonus_percent=_component(comps, "bonusPercent", d.bonus_percent),
                lta_percent=_component(comps, "ltaPercent", d.lta_percent),
                pf_employee_percent=_component(comps, "pfEmployeePercent", d.pf_employee_percent),
                pf_employer_percent=_component(comps, "pfEmployerPercent", d.pf_employer_percent),
                professional_tax=_component(comps, "professionalTax", d.professional_tax),
            )

    def save(self, *, employee_id: int, config: WageConfig) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO salary_details(employee_id, wage_type, wage, working_days, break_time, components)
                VALUES(%s,%s,%s,%s,%s,%s)
                ON DUPLICATE KEY UPDATE
                    wage_type=VALUES(wage_type),
                    wage=VALUES(wage),
                    working_days=VALUES(working_days),
                    break_time=VALUES(break_time),
                    components=VALUES(components)
                """,
                (
                    int(employee_id),
                    config.wage_basis.value,
                    config.gross_wage,
                    int(config.working_days_per_week),
                    config.daily_break_hours,
                    json.dumps(config.to_components()),
                ),
            )
