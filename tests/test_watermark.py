from index_monitor.watermark import MIN_TIMESTAMP, Watermark


class TestWatermark:
    def test_starts_at_sentinel(self):
        assert Watermark().value == MIN_TIMESTAMP == "0000-00-00T00:00:00.000Z"

    def test_sentinel_admits_real_timestamps(self):
        assert Watermark().admits("1970-01-01T00:00:00.000Z")
        assert Watermark().admits("2024-01-15T10:30:00Z")

    def test_admits_is_strict(self):
        wm = Watermark("2024-01-15T10:30:00.000Z")
        assert not wm.admits("2024-01-15T10:30:00.000Z")
        assert not wm.admits("2024-01-15T10:29:59.999Z")
        assert wm.admits("2024-01-15T10:30:00.001Z")

    def test_advance_takes_max_not_last(self):
        wm = Watermark().advance(["2024-01-15T10:30:02.000Z", "2024-01-15T10:30:01.000Z"])
        assert wm.value == "2024-01-15T10:30:02.000Z"

    def test_advance_never_moves_back(self):
        wm = Watermark("2024-01-15T10:30:00.000Z")
        assert wm.advance(["2023-12-31T23:59:59.000Z"]) == wm

    def test_advance_empty_is_unchanged(self):
        wm = Watermark("2024-01-15T10:30:00.000Z")
        assert wm.advance([]) is wm

    def test_advance_returns_new_value(self):
        wm = Watermark()
        newer = wm.advance(["2024-01-15T10:30:00.000Z"])
        assert wm.value == MIN_TIMESTAMP
        assert str(newer) == "2024-01-15T10:30:00.000Z"
