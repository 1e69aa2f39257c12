from datetime import date
from html import escape

from ...domain.entities import FeeRecord, SchoolConfig, User

_STYLE = """
body { font-family: 'Inter', sans-serif; padding: 40px; color: #1e293b; background: #fff; line-height: 1.5; }
.receipt { border: 2px solid #e2e8f0; padding: 40px; border-radius: 24px; max-width: 800px; margin: 0 auto; }
.header { display: flex; justify-content: space-between; border-bottom: 4px solid #3b82f6; padding-bottom: 24px; margin-bottom: 32px; }
.school-info h1 { font-size: 28px; font-weight: 800; margin: 0; text-transform: uppercase; }
.school-info p { margin: 4px 0 0 0; color: #64748b; font-size: 14px; font-weight: 600; }
.receipt-meta { text-align: right; }
.receipt-meta h2 { margin: 0; font-size: 20px; font-weight: 800; color: #3b82f6; }
.receipt-meta p { margin: 4px 0 0 0; font-family: monospace; font-size: 16px; font-weight: 700; }
table { width: 100%; border-collapse: collapse; margin-top: 24px; }
th { text-align: left; padding: 12px; background: #f8fafc; border-bottom: 2px solid #e2e8f0; font-size: 12px; text-transform: uppercase; color: #64748b; }
td { padding: 16px 12px; border-bottom: 1px solid #f1f5f9; font-size: 15px; }
.total-row { background: #f8fafc; font-weight: 800; font-size: 18px; }
.footer { margin-top: 48px; text-align: center; border-top: 1px dashed #e2e8f0; font-size: 12px; color: #94a3b8; }
.stamp { border: 4px solid #10b981; color: #10b981; padding: 10px 20px; border-radius: 12px; font-weight: 800; display: inline-block; transform: rotate(-10deg); margin-top: 24px; }
.stamp.pending { border-color: #f59e0b; color: #f59e0b; }
"""


def format_inr(amount: float) -> str:
    """Индийская группировка разрядов: 1,23,456."""
    whole, _, frac = f"{amount:.2f}".partition(".")
    head, tail = whole[:-3], whole[-3:]
    groups = []
    while len(head) > 2:
        groups.insert(0, head[-2:])
        head = head[:-2]
    if head:
        groups.insert(0, head)
    text = ",".join(groups + [tail]) if groups else tail
    return text if frac == "00" else f"{text}.{frac}"


def render_receipt(fee: FeeRecord, student: User | None, config: SchoolConfig,
                   issued: date | None = None) -> str:
    issued = issued or date.today()
    name = escape(student.name) if student else "N/A"
    uid = escape(student.uid) if student else "N/A"
    period = escape(", ".join(fee.months)) if fee.months else "N/A"
    amount = format_inr(fee.amount)
    paid = fee.status == "PAID"
    return f"""<html>
<head>
<title>Institutional Receipt - {escape(fee.receipt_id)}</title>
<style>{_STYLE}</style>
</head>
<body onload="window.print()">
<div class="receipt">
  <div class="header">
    <div class="school-info">
      <h1>{escape(config.name)}</h1>
      <p>{escape(config.address)}</p>
      <p>Contact: {escape(config.contact)}</p>
    </div>
    <div class="receipt-meta">
      <h2>OFFICIAL RECEIPT</h2>
      <p>#{escape(fee.receipt_id)}</p>
    </div>
  </div>
  <div class="details-grid">
    <div class="detail-box">
      <h3>Learner Identity</h3>
      <p>{name}</p>
      <p>UID: {uid}</p>
    </div>
    <div class="detail-box">
      <h3>Date of Issue</h3>
      <p>{issued.strftime("%d/%m/%Y")}</p>
    </div>
  </div>
  <table>
    <thead><tr><th>Academic Period / Description</th><th>Amount (INR)</th></tr></thead>
    <tbody>
      <tr>
        <td><strong>Tuition &amp; Institutional Charges</strong><br/>Period: {period}</td>
        <td>&#8377;{amount}</td>
      </tr>
      <tr class="total-row">
        <td>{"GRAND TOTAL PAID" if paid else "AMOUNT DUE"}</td>
        <td>&#8377;{amount}</td>
      </tr>
    </tbody>
  </table>
  <div class="stamp{'' if paid else ' pending'}">{escape(fee.status)}</div>
  <div class="footer">
    <p>{escape(config.receipt_footer)}</p>
    <p>System Generated Document &bull; {escape(config.name)}</p>
  </div>
</div>
</body>
</html>"""
