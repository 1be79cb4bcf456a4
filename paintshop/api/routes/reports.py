from __future__ import annotations

import io
from datetime import datetime, timezone

import pandas as pd
from fastapi import APIRouter, Depends, Query
from fastapi.responses import StreamingResponse
from sqlalchemy.ext.asyncio import AsyncSession

from paintshop.api.routes.analytics import ProductionFilters, production_filters
from paintshop.core.deps import get_current_user, require_roles
from paintshop.db.session import get_async_session
from paintshop.repositories.requests import ItemRequestRepository
from paintshop.services.classification import shift_label
from paintshop.services.production import ProductionService

# PUBLIC_INTERFACE
router = APIRouter(prefix="/reports", tags=["Reports"])

_FORMAT_QUERY = Query("csv", description="Export format: csv, xlsx or pdf")


def _export_dataframe(
    df: pd.DataFrame,
    filename_base: str,
    export_format: str,
) -> StreamingResponse:
    """
    Convert DataFrame to the requested format and return a StreamingResponse.

    Supported formats:
      - csv: text/csv
      - xlsx: application/vnd.openxmlformats-officedocument.spreadsheetml.sheet
      - pdf: application/pdf (simple tabular rendering)
    Unknown formats fall back to CSV.
    """
    export_format = (export_format or "csv").lower()

    if export_format in ("xlsx", "excel", "xls"):
        buffer = io.BytesIO()
        with pd.ExcelWriter(buffer, engine="openpyxl") as writer:
            df.to_excel(writer, index=False, sheet_name="Report")
        buffer.seek(0)
        headers = {"Content-Disposition": f'attachment; filename="{filename_base}.xlsx"'}
        return StreamingResponse(
            buffer,
            media_type="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
            headers=headers,
        )

    if export_format == "pdf":
        from reportlab.lib import colors
        from reportlab.lib.pagesizes import landscape, letter
        from reportlab.lib.styles import getSampleStyleSheet
        from reportlab.platypus import Paragraph, SimpleDocTemplate, Table, TableStyle

        buffer = io.BytesIO()
        doc = SimpleDocTemplate(
            buffer, pagesize=landscape(letter), leftMargin=18, rightMargin=18, topMargin=18, bottomMargin=18
        )
        styles = getSampleStyleSheet()
        generated = datetime.now(tz=timezone.utc).strftime("%Y-%m-%d %H:%M UTC")
        elements: list = [
            Paragraph(f"{filename_base.replace('_', ' ').title()} ({generated})", styles["Title"])
        ]
        data = [list(df.columns)] + df.astype(str).values.tolist()
        table = Table(data, repeatRows=1)
        table.setStyle(
            TableStyle(
                [
                    ("BACKGROUND", (0, 0), (-1, 0), colors.lightgrey),
                    ("TEXTCOLOR", (0, 0), (-1, 0), colors.black),
                    ("ALIGN", (0, 0), (-1, -1), "LEFT"),
                    ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
                    ("FONTSIZE", (0, 0), (-1, -1), 8),
                    ("BOTTOMPADDING", (0, 0), (-1, 0), 6),
                    ("GRID", (0, 0), (-1, -1), 0.25, colors.grey),
                ]
            )
        )
        elements.append(table)
        doc.build(elements)
        buffer.seek(0)
        headers = {"Content-Disposition": f'attachment; filename="{filename_base}.pdf"'}
        return StreamingResponse(buffer, media_type="application/pdf", headers=headers)

    text_buffer = io.StringIO()
    df.to_csv(text_buffer, index=False)
    text_buffer.seek(0)
    headers = {"Content-Disposition": f'attachment; filename="{filename_base}.csv"'}
    return StreamingResponse(text_buffer, media_type="text/csv", headers=headers)


PRODUCTION_COLUMNS = ["data", "hora", "turno", "skids", "skids_vazios", "modelo", "cor", "qtd", "repintura"]


# PUBLIC_INTERFACE
@router.get(
    "/production-records",
    summary="Export production records",
    description="One row per painted item (slots without items get one empty row), in CSV, Excel or PDF.",
    dependencies=[Depends(get_current_user)],
)
async def export_production_records(
    filters: ProductionFilters = Depends(production_filters),
    session: AsyncSession = Depends(get_async_session),
    format: str = _FORMAT_QUERY,
) -> StreamingResponse:
    records = await ProductionService(session).load_records(
        start_date=filters.start_date, end_date=filters.end_date, shift=filters.shift
    )
    rows = []
    for r in records:
        base = {
            "data": r.data.isoformat(),
            "hora": r.hora,
            "turno": shift_label(r.hora),
            "skids": r.skids,
            "skids_vazios": r.skids_vazios,
        }
        items = [i for i in (r.producao or []) if isinstance(i, dict)]
        if not items:
            rows.append({**base, "modelo": None, "cor": None, "qtd": None, "repintura": None})
        for item in items:
            rows.append(
                {
                    **base,
                    "modelo": item.get("modelo"),
                    "cor": item.get("cor"),
                    "qtd": item.get("qtd"),
                    "repintura": bool(item.get("repintura")),
                }
            )
    df = pd.DataFrame(rows, columns=PRODUCTION_COLUMNS)
    return _export_dataframe(df, "production_records", format)


# PUBLIC_INTERFACE
@router.get(
    "/item-requests",
    summary="Export item requests",
    description="All item requests with requester and assignee names, in CSV, Excel or PDF.",
    dependencies=[Depends(require_roles("admin", "manager"))],
)
async def export_item_requests(
    session: AsyncSession = Depends(get_async_session),
    format: str = _FORMAT_QUERY,
) -> StreamingResponse:
    items = await ItemRequestRepository(session).list_requests()
    df = pd.DataFrame(
        [
            {
                "id": x.id,
                "item_name": x.item_name,
                "quantity": x.quantity,
                "priority": x.priority,
                "status": x.status,
                "requested_by": x.requester.nome if x.requester else None,
                "assigned_to": x.assignee.nome if x.assignee else None,
                "created_at": x.created_at.isoformat() if x.created_at else None,
            }
            for x in items
        ],
        columns=["id", "item_name", "quantity", "priority", "status", "requested_by", "assigned_to", "created_at"],
    )
    return _export_dataframe(df, "item_requests", format)
