from protean import current_domain

from storefront.ordering.order.sequence import OrderSequence, format_order_number, next_value


class TestFormatOrderNumber:
    def test_pads_to_four_digits(self):
        assert format_order_number(1) == "ORD-0001"
        assert format_order_number(42) == "ORD-0042"

    def test_grows_past_four_digits(self):
        assert format_order_number(12345) == "ORD-12345"


class TestAdvance:
    def test_advance_from_zero(self):
        sequence = OrderSequence(name="test", last_value=0)
        assert sequence.advance() == 1
        assert sequence.advance() == 2
        assert sequence.last_value == 2


class TestNextValue:
    def test_creates_sequence_on_first_use(self):
        repo = current_domain.repository_for(OrderSequence)
        assert next_value(repo, "fresh") == 1
        assert repo.get("fresh").last_value == 1

    def test_continues_from_stored_value(self):
        repo = current_domain.repository_for(OrderSequence)
        next_value(repo, "ongoing")
        next_value(repo, "ongoing")
        assert next_value(repo, "ongoing") == 3

    def test_sequences_are_independent(self):
        repo = current_domain.repository_for(OrderSequence)
        next_value(repo, "a")
        assert next_value(repo, "b") == 1
