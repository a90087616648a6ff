"""Render a structured policy record as English and Chinese sentences."""

from typing import Any, Mapping, Union

from policy_extractor.extraction.record import StructuredRecord
from policy_extractor.schemas.analysis import RenderedPolicy

NON_REFUNDABLE = RenderedPolicy(
    en="This booking is non-refundable and cannot be cancelled.",
    cn="此预订不可取消或退款。",
)


def _flag(value: Any) -> bool:
    return str(value).strip().lower() == "true"


def _cutoff_text(record: StructuredRecord) -> tuple:
    if record.has("deadline.iso"):
        iso = record.get("deadline.iso")
        return f"until {iso}", f"至 {iso}"
    if _flag(record.get("deadline.absolute_hotel_time")):
        time = record.get("deadline.local_time", "")
        date = record.get("deadline.date_ddmmmyy", "")
        return (
            f"until {time} on {date} (hotel local time)",
            f"至 {date} {time}（酒店当地时间）",
        )
    if record.has("window.cutoff_days"):
        days = record.get("window.cutoff_days")
        return f"until {days} day(s) before arrival", f"入住前 {days} 天之前"
    if record.has("window.cutoff_hours"):
        hours = record.get("window.cutoff_hours")
        return f"until {hours} hour(s) before arrival", f"入住前 {hours} 小时之前"
    return "", ""


def _fee_text(record: StructuredRecord) -> tuple:
    fee_type = str(record.get("fee.type", "")).lower()
    if fee_type == "fixed_amount":
        amount = record.get("fee.amount", "")
        currency = record.get("fee.currency", "")
        fee_en = f"{amount} {currency}".strip()
        fee_cn = f"{currency} {amount}".strip()
        if _flag(record.get("fee.per_room")):
            fee_en += " per room"
            fee_cn += " 每间客房"
    elif fee_type == "nights_penalty":
        nights = record.get("fee.nights", "")
        fee_en = f"{nights} night penalty"
        fee_cn = f"扣除 {nights} 晚房费"
    elif fee_type == "percentage":
        percent = record.get("fee.percent", "")
        fee_en = f"{percent}% of the stay"
        fee_cn = f"房费的 {percent}%"
    elif fee_type == "full_stay":
        fee_en = "the full stay"
        fee_cn = "全额房费"
    else:
        return "", ""

    tax_scope = str(record.get("fee.tax_scope", "")).lower()
    if tax_scope == "excluded":
        fee_en += " (excluding taxes/fees)"
        fee_cn += "（不含税费）"
    elif tax_scope == "included":
        fee_en += " (including taxes/fees)"
        fee_cn += "（含税费）"
    return fee_en, fee_cn


def render_policy(record: Union[StructuredRecord, Mapping[str, Any], None]) -> RenderedPolicy:
    """Render *record* as short English and Chinese summaries.

    Unknown fee types and records without a deadline render as empty
    strings for that part; a non-refundable policy short-circuits.
    """
    record = StructuredRecord.coerce(record)

    if str(record.get("policy.cancellable", "")).strip().lower() == "false":
        return NON_REFUNDABLE.model_copy()

    parts_en = []
    parts_cn = []

    cutoff_en, cutoff_cn = _cutoff_text(record)
    if cutoff_en:
        parts_en.append(f"Free cancellation {cutoff_en}.")
        parts_cn.append(f"可免费取消，{cutoff_cn}。")

    fee_en, fee_cn = _fee_text(record)
    if fee_en:
        parts_en.append(f"After the deadline, cancellation incurs a penalty of {fee_en}.")
        parts_cn.append(f"在截止时间之后取消，将收取 {fee_cn}。")

    return RenderedPolicy(en=" ".join(parts_en), cn=" ".join(parts_cn))
