"""Tests for the English / Chinese policy renderer."""

from policy_extractor.rendering.renderer import render_policy


class TestRenderPolicy:

    def test_non_refundable_short_circuits(self):
        rendered = render_policy({"policy": {"cancellable": "false"}, "fee": {"type": "full_stay"}})
        assert rendered.en == "This booking is non-refundable and cannot be cancelled."
        assert rendered.cn == "此预订不可取消或退款。"

    def test_cutoff_days_and_percent(self):
        rendered = render_policy({
            "window": {"cutoff_days": 3},
            "fee": {"type": "percentage", "percent": 50},
        })
        assert rendered.en == (
            "Free cancellation until 3 day(s) before arrival. "
            "After the deadline, cancellation incurs a penalty of 50% of the stay."
        )
        assert "入住前 3 天之前" in rendered.cn
        assert "房费的 50%" in rendered.cn

    def test_iso_deadline_preferred(self):
        rendered = render_policy({
            "deadline": {"iso": "2025-06-01T12:00"},
            "window": {"cutoff_days": 3},
        })
        assert rendered.en == "Free cancellation until 2025-06-01T12:00."

    def test_hotel_local_time(self):
        rendered = render_policy({"deadline": {
            "absolute_hotel_time": "true",
            "local_time": "18:00",
            "date_ddmmmyy": "01JUN25",
        }})
        assert rendered.en == "Free cancellation until 18:00 on 01JUN25 (hotel local time)."

    def test_fixed_amount_per_room_excluding_tax(self):
        rendered = render_policy({"fee": {
            "type": "fixed_amount",
            "amount": 100,
            "currency": "USD",
            "per_room": "true",
            "tax_scope": "excluded",
        }})
        assert rendered.en == (
            "After the deadline, cancellation incurs a penalty of "
            "100 USD per room (excluding taxes/fees)."
        )
        assert rendered.cn == "在截止时间之后取消，将收取 USD 100 每间客房（不含税费）。"

    def test_nights_including_tax(self):
        rendered = render_policy({"fee": {"type": "nights_penalty", "nights": 1, "tax_scope": "included"}})
        assert rendered.en.endswith("1 night penalty (including taxes/fees).")

    def test_full_stay(self):
        assert "the full stay" in render_policy({"fee": {"type": "full_stay"}}).en

    def test_empty_record(self):
        rendered = render_policy({})
        assert rendered.en == ""
        assert rendered.cn == ""

    def test_unknown_fee_type_skipped(self):
        assert render_policy({"fee": {"type": "mystery"}}).en == ""
