# app/domain/reporting/schemas.py
from typing import List, Optional

from pydantic import BaseModel


class TopProduct(BaseModel):
    producto_id: int
    nombre: str
    cantidad: int
    ingreso: float


class KpiReport(BaseModel):
    desde: Optional[str]
    hasta: Optional[str]
    ventas_totales: float
    boletas: int
    ticket_promedio: float
    top5_productos: List[TopProduct]


class IncomeStatement(BaseModel):
    desde: Optional[str]
    hasta: Optional[str]
    ingresos: float
    costo_ventas: float
    utilidad_bruta: float
    impuestos: float
    utilidad_neta: float


class Assets(BaseModel):
    caja_estimada: float
    inventario: float


class Liabilities(BaseModel):
    cuentas_por_pagar: float


class BalanceSheet(BaseModel):
    al: Optional[str]
    activos: Assets
    pasivos: Liabilities
    patrimonio: float
