from datetime import timedelta
from decimal import Decimal

from tutorlink.db import models
from tutorlink.services import attendance_service, ledger_service

from factories import create_payment, create_slot, create_tutor, create_user


def _confirmed_slot(session, tutor, learner, payment, **fields):
    return create_slot(
        session, tutor, learner, payment=payment, learner_join=True, tutor_join=True, **fields
    )


def test_course_payment_always_counts(db_session):
    learner = create_user(db_session)
    tutor = create_tutor(db_session)
    create_payment(db_session, tutor, learner, payment_type=models.PaymentType.course, amount="100.00")

    assert ledger_service.recompute_balance(db_session, tutor.id) == Decimal("80.00")


def test_booking_payment_waits_for_every_slot(db_session):
    learner = create_user(db_session)
    tutor = create_tutor(db_session)
    payment = create_payment(db_session, tutor, learner, amount="200.00")
    _confirmed_slot(db_session, tutor, learner, payment)
    pending = create_slot(
        db_session, tutor, learner, payment=payment, tutor_join=True, starts_in=timedelta(days=2)
    )

    assert ledger_service.is_booking_released(db_session, payment.id) is False
    assert ledger_service.recompute_balance(db_session, tutor.id) == Decimal("0.00")

    pending.learner_join = True
    db_session.commit()

    assert ledger_service.is_booking_released(db_session, payment.id) is True
    assert ledger_service.recompute_balance(db_session, tutor.id) == Decimal("170.00")


def test_booking_payment_without_slots_is_held(db_session):
    learner = create_user(db_session)
    tutor = create_tutor(db_session)
    payment = create_payment(db_session, tutor, learner)

    assert ledger_service.is_booking_released(db_session, payment.id) is False
    assert ledger_service.recompute_balance(db_session, tutor.id) == Decimal("0.00")


def test_net_amount_snapshot_wins_over_commission(db_session):
    learner = create_user(db_session)
    tutor = create_tutor(db_session)
    payment = create_payment(db_session, tutor, learner, amount="200.00")
    payment.net_amount = Decimal("150.00")
    db_session.commit()
    _confirmed_slot(db_session, tutor, learner, payment)

    assert ledger_service.recompute_balance(db_session, tutor.id) == Decimal("150.00")


def test_unpaid_and_foreign_payments_are_ignored(db_session):
    learner = create_user(db_session)
    tutor = create_tutor(db_session)
    other_tutor = create_tutor(db_session, email="other@example.com")
    refunded = create_payment(db_session, tutor, learner, payment_type=models.PaymentType.course)
    refunded.status = models.PaymentStatus.refunded
    db_session.commit()
    create_payment(db_session, other_tutor, learner, payment_type=models.PaymentType.course)

    assert ledger_service.recompute_balance(db_session, tutor.id) == Decimal("0.00")


def test_mixed_payments_are_summed(db_session):
    learner = create_user(db_session)
    tutor = create_tutor(db_session)
    create_payment(db_session, tutor, learner, payment_type=models.PaymentType.course, amount="49.99")
    released = create_payment(db_session, tutor, learner, amount="33.33")
    _confirmed_slot(db_session, tutor, learner, released)

    # 49.99 * 0.80 + 33.33 * 0.85
    assert ledger_service.recompute_balance(db_session, tutor.id) == Decimal("68.32")


def test_settlement_writes_balance_to_wallet(db_session):
    learner = create_user(db_session)
    tutor = create_tutor(db_session)
    create_payment(db_session, tutor, learner, payment_type=models.PaymentType.course, amount="100.00")
    payment = create_payment(db_session, tutor, learner, amount="200.00")
    slot = create_slot(db_session, tutor, learner, payment=payment, tutor_join=True)

    attendance_service.learner_confirm_join(db_session, learner.id, slot.id, "https://evidence/1")

    db_session.refresh(tutor)
    assert tutor.wallet_balance == Decimal("250.00")

    attendance_service.tutor_confirm_join(db_session, tutor.user_id, slot.id, "https://evidence/2")

    db_session.refresh(tutor)
    assert tutor.wallet_balance == Decimal("250.00")
