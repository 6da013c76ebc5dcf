from fingerpaint.effects import EFFECT_STYLES, EffectKind, EffectTimer, NoticeBoard


def test_activate_when_idle():
    timer = EffectTimer(duration=2.0)
    assert timer.activate(EffectKind.GOOD, 10.0)
    assert timer.kind is EffectKind.GOOD
    assert timer.started_at == 10.0


def test_activation_blocked_while_active():
    timer = EffectTimer(duration=2.0)
    timer.activate(EffectKind.FIREWORK, 10.0)
    assert not timer.activate(EffectKind.GOOD, 11.0)
    assert timer.kind is EffectKind.FIREWORK
    assert timer.started_at == 10.0


def test_expiry():
    timer = EffectTimer(duration=2.0)
    timer.activate(EffectKind.GOOD, 10.0)
    assert timer.update(11.99) is EffectKind.GOOD
    assert timer.update(12.0) is EffectKind.GOOD
    assert timer.update(12.01) is EffectKind.NONE
    assert timer.activate(EffectKind.SAD, 12.01)


def test_none_is_not_an_effect():
    timer = EffectTimer()
    assert not timer.activate(EffectKind.NONE, 0.0)
    assert not timer.active


def test_every_effect_has_a_style():
    assert set(EFFECT_STYLES) == set(EffectKind) - {EffectKind.NONE}


def test_notice_expires_and_is_replaced():
    board = NoticeBoard(duration=1.0)
    assert board.current(0.0) is None

    board.post("first", 0.0)
    board.post("second", 0.5)
    assert board.current(1.2) == "second"
    assert board.current(1.5) is None
