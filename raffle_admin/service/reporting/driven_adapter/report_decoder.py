"""
Report Payload Decoder

Rows missing an id get a stable negative one derived from their content, so
the same row keeps the same id across refetches.
"""

from typing import Any

from raffle_admin.platform.decode.lenient import (
    pick,
    pick_int,
    pick_int_list,
    pick_money,
    pick_str,
    stable_negative_id,
    unwrap_list,
)
from raffle_admin.platform.exception.exceptions import UnexpectedShapeError
from raffle_admin.service.reporting.domain.entity.draw_dashboard_entity import (
    DrawSellerSales,
    SeatStatistics,
    SellerSalesRow,
)
from raffle_admin.service.reporting.domain.entity.expense_entity import Expense
from raffle_admin.service.reporting.domain.entity.productivity_entity import (
    DrawProductivity,
    DrawProductivityRow,
    MonthlyProductivity,
    SellerProductivityRow,
)
from raffle_admin.service.reporting.domain.entity.receivable_entity import Receivable
from raffle_admin.service.shared_kernel.domain.entity.draw_entity import Lottery


def _number(raw: Any, *names: str) -> float:
    value = pick(raw, *names)
    if isinstance(value, bool):
        return 0.0
    try:
        return float(value)
    except (TypeError, ValueError):
        return 0.0


def _list_of(raw: Any, endpoint: str, expected: str, *envelope_keys: str) -> list[Any]:
    items = unwrap_list(raw, *envelope_keys)
    if items is None:
        raise UnexpectedShapeError(endpoint, expected)
    return list(items)


def decode_receivable(raw: Any, *, position: int) -> Receivable:
    name = pick_str(raw, 'nombre', 'cliente_nombre') or ''
    phone = pick_str(raw, 'telefono', 'cliente_telefono', 'celular')
    total = pick_money(raw, 'total', 'total_venta') or 0
    paid = pick_money(raw, 'abonado', 'total_abonado') or 0
    balance = pick_money(raw, 'saldo') or 0
    row_id = pick_int(raw, 'id', 'id_venta')
    if row_id is None:
        row_id = stable_negative_id(name, phone or '', total, paid, balance, position)
    return Receivable(
        id=row_id,
        name=name,
        phone=phone,
        total=total,
        paid=paid,
        balance=balance,
        seller_id=pick_int(raw, 'vendedor_id'),
        seller_color=pick_str(raw, 'vendedor_color'),
        seat_number=pick_int(raw, 'puesto'),
        seat_numbers=tuple(pick_int_list(raw, 'puestos') or ()),
    )


def decode_receivables(raw: Any, *, endpoint: str) -> list[Receivable]:
    items = _list_of(raw, endpoint, 'a list of receivables', 'items', 'cartera')
    return [decode_receivable(item, position=i) for i, item in enumerate(items)]


def decode_expense(raw: Any, *, position: int) -> Expense:
    concept = pick_str(raw, 'concepto') or ''
    amount = pick_money(raw, 'valor') or 0
    created_at = pick_str(raw, 'created_at', 'fecha')
    user_id = pick_int(raw, 'usuario_id', 'id_usuario')
    row_id = pick_int(raw, 'id_gasto', 'id')
    if row_id is None:
        row_id = stable_negative_id(created_at or '', concept, amount, user_id or '', position)
    note = pick(raw, 'observacion')
    return Expense(
        id=row_id,
        concept=concept,
        amount=amount,
        note=None if note is None else str(note),
        user_id=user_id,
        user_name=pick_str(raw, 'usuario_nombre', 'nombre_usuario', 'usuario'),
        created_at=created_at,
    )


def decode_expenses(raw: Any, *, endpoint: str) -> list[Expense]:
    items = _list_of(raw, endpoint, 'a list of expenses', 'items', 'gastos')
    return [decode_expense(item, position=i) for i, item in enumerate(items)]


def decode_draw_row(raw: Any, *, position: int) -> DrawProductivityRow:
    draw_id = pick_int(raw, 'id_sorteo', 'id')
    if draw_id is None:
        draw_id = position + 1
    return DrawProductivityRow(
        draw_id=draw_id,
        draw_name=pick_str(raw, 'sorteo', 'nombre') or f'Sorteo {draw_id}',
        date=pick_str(raw, 'fecha', 'created_at'),
        state=pick_str(raw, 'estado') or '',
        total_sold=pick_money(raw, 'total_vendido') or 0,
        total_paid=pick_money(raw, 'total_abonado') or 0,
        total_balance=pick_money(raw, 'saldo_total') or 0,
        occupancy_percent=_number(raw, 'ocupacion_porcentaje'),
    )


def decode_seller_row(raw: Any, *, position: int) -> SellerProductivityRow:
    seller_id = pick_int(raw, 'vendedor_id', 'id_vendedor')
    return SellerProductivityRow(
        seller_id=seller_id,
        seller_name=pick_str(raw, 'vendedor', 'nombre')
        or f'Vendedor {seller_id if seller_id is not None else position + 1}',
        sales_count=pick_int(raw, 'ventas_realizadas') or 0,
        total_sold=pick_money(raw, 'total_vendido') or 0,
        total_collected=pick_money(raw, 'total_cobrado') or 0,
        total_balance=pick_money(raw, 'saldo_total') or 0,
        effectiveness_percent=_number(raw, 'efectividad_porcentaje'),
    )


def _sellers(raw: Any) -> tuple[SellerProductivityRow, ...]:
    items = unwrap_list(pick(raw, 'por_vendedor')) or []
    return tuple(decode_seller_row(item, position=i) for i, item in enumerate(items))


def decode_monthly_productivity(
    raw: Any, *, endpoint: str, year: int, month: int
) -> MonthlyProductivity:
    if not isinstance(raw, dict):
        raise UnexpectedShapeError(endpoint, 'a monthly productivity object')
    draws = unwrap_list(raw.get('sorteos')) or []
    return MonthlyProductivity(
        year=pick_int(raw, 'anio') or year,
        month=pick_int(raw, 'mes') or month,
        draws=tuple(decode_draw_row(item, position=i) for i, item in enumerate(draws)),
        by_seller=_sellers(raw),
    )


def decode_draw_productivity(raw: Any, *, endpoint: str) -> DrawProductivity:
    if not isinstance(raw, dict):
        raise UnexpectedShapeError(endpoint, 'a draw productivity object')
    return DrawProductivity(summary=decode_draw_row(raw, position=0), by_seller=_sellers(raw))


def decode_lottery(raw: Any, *, position: int) -> Lottery:
    lottery_id = pick_int(raw, 'id', 'id_loteria') or position + 1
    return Lottery(lottery_id=lottery_id, name=pick_str(raw, 'nombre') or f'Lotería {lottery_id}')


def decode_lotteries(raw: Any, *, endpoint: str) -> list[Lottery]:
    items = _list_of(raw, endpoint, 'a list of lotteries', 'items', 'loterias')
    lotteries = [decode_lottery(item, position=i) for i, item in enumerate(items)]
    return sorted(lotteries, key=lambda lottery: lottery.name.casefold())


def decode_seat_statistics(raw: Any, *, endpoint: str) -> SeatStatistics:
    if not isinstance(raw, dict):
        raise UnexpectedShapeError(endpoint, 'a seat statistics object')
    return SeatStatistics(
        total=pick_int(raw, 'total') or 0,
        available=pick_int(raw, 'disponibles') or 0,
        reserved=pick_int(raw, 'reservados') or 0,
        sold=pick_int(raw, 'vendidos') or 0,
        blocked=pick_int(raw, 'bloqueados') or 0,
        void=pick_int(raw, 'anulados') or 0,
        verified_sum=pick_int(raw, 'suma_verificada') or 0,
    )


def decode_seller_sales_row(raw: Any, *, position: int) -> SellerSalesRow:
    seller_id = pick_int(raw, 'vendedor_id', 'id_vendedor')
    return SellerSalesRow(
        seller_id=seller_id,
        name=pick_str(raw, 'nombre', 'vendedor')
        or f'Vendedor {seller_id if seller_id is not None else position + 1}',
        total_paid=pick_money(raw, 'total_pagado') or 0,
        total_partial=pick_money(raw, 'total_abonado') or 0,
    )


def decode_draw_seller_sales(raw: Any, *, endpoint: str, draw_id: int) -> DrawSellerSales:
    if not isinstance(raw, dict):
        raise UnexpectedShapeError(endpoint, 'a sales by seller object')
    rows = unwrap_list(raw.get('vendedores')) or []
    return DrawSellerSales(
        draw_id=pick_int(raw, 'sorteo_id', 'id_sorteo') or draw_id,
        sellers=tuple(decode_seller_sales_row(item, position=i) for i, item in enumerate(rows)),
    )
