from restorank.recommendations.keywords import BudgetTier, Occasion, classify_budget, classify_occasion


def test_occasion_english():
    assert classify_occasion("Romantic date night") == {Occasion.romantic}
    assert classify_occasion("something QUICK") == {Occasion.quick}
    assert classify_occasion("client meeting") == {Occasion.business}


def test_occasion_hebrew():
    assert classify_occasion("דייט רומנטי") == {Occasion.romantic}
    assert classify_occasion("ארוחה מהירה") == {Occasion.quick}
    assert classify_occasion("ארוחת עסקים") == {Occasion.business}


def test_occasion_can_match_several_tags():
    assert classify_occasion("quick business lunch") == {Occasion.quick, Occasion.business}


def test_occasion_none():
    assert classify_occasion("") == frozenset()
    assert classify_occasion(None) == frozenset()
    assert classify_occasion("family dinner") == frozenset()


def test_budget_tiers():
    assert classify_budget("cheap") is BudgetTier.cheap
    assert classify_budget("Something CHEAP please") is BudgetTier.cheap
    assert classify_budget("moderate") is BudgetTier.moderate
    assert classify_budget("expensive") is BudgetTier.expensive


def test_budget_hebrew():
    assert classify_budget("זול") is BudgetTier.cheap
    assert classify_budget("מחיר סביר") is BudgetTier.moderate
    assert classify_budget("יוקרתי") is BudgetTier.expensive


def test_budget_unrecognized():
    assert classify_budget("whatever works") is BudgetTier.unrecognized
    assert classify_budget(None) is BudgetTier.unrecognized
    assert classify_budget("") is BudgetTier.unrecognized
