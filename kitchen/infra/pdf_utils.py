import io
from reportlab.lib.pagesizes import A4
from reportlab.platypus import SimpleDocTemplate, Table, TableStyle, Paragraph, Spacer
from reportlab.lib import colors
from reportlab.lib.styles import getSampleStyleSheet

from kitchen.utilities.constants import DATE_FORMAT


def generate_pdf_for_shopping_list(shopping_list):
    """Render a shopping list as a printable table: Item / Quantity / Category / Bought."""
    buf = io.BytesIO()
    doc = SimpleDocTemplate(
        buf, pagesize=A4,
        rightMargin=20, leftMargin=20, topMargin=20, bottomMargin=20
    )

    styles = getSampleStyleSheet()
    created = shopping_list.created_date.strftime(DATE_FORMAT) if shopping_list.created_date else ""
    elements = [
        Paragraph(shopping_list.name or f"Shopping list #{shopping_list.id}", styles["Title"]),
        Paragraph(f"Created {created} - {shopping_list.purchased_count}/{len(shopping_list.items)} bought",
                  styles["Normal"]),
        Spacer(1, 16),
    ]

    data = [["Item", "Quantity", "Category", "Bought"]]
    for item in shopping_list.items:
        data.append([item.name, item.quantity or "-", item.category or "-", "x" if item.is_purchased else ""])

    table = Table(data, repeatRows=1)
    table.setStyle(TableStyle([
        ("BACKGROUND", (0,0), (-1,0), colors.HexColor("#4CAF50")),
        ("TEXTCOLOR", (0,0), (-1,0), colors.whitesmoke),
        ("ALIGN", (0,0), (-1,-1), "LEFT"),
        ("ALIGN", (-1,0), (-1,-1), "CENTER"),
        ("FONTNAME", (0,0), (-1,0), "Helvetica-Bold"),
        ("FONTSIZE", (0,0), (-1,0), 12),
        ("BOTTOMPADDING", (0,0), (-1,0), 10),
        ("GRID", (0,0), (-1,-1), 0.5, colors.grey),
    ]))

    elements.append(table)
    doc.build(elements)
    return buf.getvalue()
