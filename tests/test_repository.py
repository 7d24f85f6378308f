"""
Tests for the soft-delete aware repository, run against in-memory SQLite.
"""
import unittest
from datetime import datetime, timedelta, timezone
from uuid import uuid4

from inventory_admin.db.engine import get_engine
from inventory_admin.db.repository import EntityRepository, OutcomeStatus
from inventory_admin.db.schema import customers, metadata
from inventory_admin.db.store import TableStore
from inventory_admin.errors import PersistenceError
from inventory_admin.models import (
    CategoryCreate,
    CustomerCreate,
    CustomerUpdate,
    ItemCreate,
    ItemUpdate,
)


class FakeClock:
    def __init__(self, start):
        self.now = start

    def __call__(self):
        return self.now

    def advance(self, **kwargs):
        self.now += timedelta(**kwargs)


def naive(value):
    # SQLite hands timestamps back without tzinfo
    return value.replace(tzinfo=None)


class RepositoryTestCase(unittest.TestCase):
    def setUp(self):
        """Fresh in-memory database per test."""
        self.engine = get_engine("sqlite://", echo=False)
        metadata.create_all(self.engine)
        self.clock = FakeClock(datetime(2024, 5, 1, 9, 0, tzinfo=timezone.utc))
        self.repo = EntityRepository(TableStore(self.engine), clock=self.clock)

    def tearDown(self):
        self.engine.dispose()

    def create_customer(self, code="CUS001", **fields):
        data = {"code": code, "name": f"Customer {code}"}
        data.update(fields)
        outcome = self.repo.create("customers", CustomerCreate.model_validate(data))
        self.assertTrue(outcome.ok, outcome.message)
        return outcome.value

    def create_category(self, name="Tools"):
        outcome = self.repo.create("categories", CategoryCreate(name=name))
        self.assertTrue(outcome.ok, outcome.message)
        return outcome.value

    def item(self, name, category_id, code=None):
        return ItemCreate(
            code=code or name.upper()[:6],
            name=name,
            category_id=category_id,
            unit="pcs",
        )


class TestReads(RepositoryTestCase):
    def test_create_then_fetch_round_trips(self):
        created = self.create_customer(city="Colombo")

        outcome = self.repo.fetch_one("customers", created.id)

        self.assertEqual(outcome.status, OutcomeStatus.OK)
        record = outcome.value
        self.assertEqual(record.id, created.id)
        self.assertEqual(record.code, "CUS001")
        self.assertEqual(record.city, "Colombo")
        self.assertTrue(record.is_active)
        self.assertEqual(naive(record.created_at), naive(self.clock.now))
        self.assertEqual(naive(record.updated_at), naive(self.clock.now))

    def test_fetch_one_unknown_or_malformed_id(self):
        self.assertEqual(self.repo.fetch_one("customers", uuid4()).status, OutcomeStatus.NOT_FOUND)
        self.assertEqual(self.repo.fetch_one("customers", "not-a-uuid").status, OutcomeStatus.NOT_FOUND)
        self.assertEqual(self.repo.fetch_one("customers", None).status, OutcomeStatus.NOT_FOUND)

    def test_inactive_records_are_hidden(self):
        created = self.create_customer()
        self.repo.soft_delete("customers", created.id)

        self.assertEqual(self.repo.fetch_one("customers", created.id).status, OutcomeStatus.NOT_FOUND)
        self.assertEqual(self.repo.fetch_many("customers"), [])

        unfiltered = self.repo.fetch_one_unfiltered("customers", created.id)
        self.assertTrue(unfiltered.ok)
        self.assertFalse(unfiltered.value.is_active)

    def test_fetch_many_orders_by_name(self):
        category = self.create_category()
        for name in ("Nail", "Drill", "Hammer"):
            self.assertTrue(self.repo.create("items", self.item(name, category.id)).ok)

        names = [item.name for item in self.repo.fetch_many("items", {}, "name")]

        self.assertEqual(names, ["Drill", "Hammer", "Nail"])

        descending = self.repo.fetch_many("items", {}, "name", ascending=False)
        self.assertEqual([item.name for item in descending], ["Nail", "Hammer", "Drill"])

    def test_fetch_many_filters(self):
        self.create_customer("CUS001", customer_type="wholesale", city="Kandy")
        self.create_customer("CUS002", city="Kandy")
        self.create_customer("CUS003", customer_type="wholesale")

        wholesale = self.repo.fetch_many("customers", {"customer_type": "wholesale", "city": None})
        self.assertEqual({c.code for c in wholesale}, {"CUS001", "CUS003"})

        both = self.repo.fetch_many("customers", {"customer_type": "wholesale", "city": "Kandy"})
        self.assertEqual([c.code for c in both], ["CUS001"])

    def test_counts(self):
        first = self.create_customer("CUS001")
        self.create_customer("CUS002")
        self.repo.soft_delete("customers", first.id)

        self.assertEqual(self.repo.count_active("customers"), 1)
        self.assertEqual(self.repo.count("customers"), 2)
        self.assertEqual(self.repo.count("customers", {"is_active": False}), 1)

    def test_unknown_kind(self):
        with self.assertRaises(ValueError):
            self.repo.fetch_many("invoices")


class TestUniqueness(RepositoryTestCase):
    def test_check_unique_tracks_active_rows(self):
        created = self.create_customer("CUS001")

        self.assertFalse(self.repo.check_unique("customers", "code", "CUS001"))
        self.assertTrue(self.repo.check_unique("customers", "code", "CUS002"))
        self.assertTrue(self.repo.check_unique("customers", "code", "CUS001", exclude_id=created.id))
        self.assertTrue(self.repo.check_unique("customers", "email", None))

        self.repo.soft_delete("customers", created.id)
        self.assertTrue(self.repo.check_unique("customers", "code", "CUS001"))

    def test_exclude_id_accepts_any_spelling(self):
        created = self.create_customer("CUS001")
        raw = str(created.id)

        for exclude_id in (raw.upper(), created.id.hex, created.id):
            with self.subTest(exclude_id=exclude_id):
                self.assertTrue(
                    self.repo.check_unique("customers", "code", "CUS001", exclude_id=exclude_id)
                )

    def test_malformed_exclude_id_excludes_nothing(self):
        self.create_customer("CUS001")
        self.assertFalse(
            self.repo.check_unique("customers", "code", "CUS001", exclude_id="not-a-uuid")
        )

    def test_code_can_be_reused_after_delete(self):
        created = self.create_customer("CUS001")
        self.repo.soft_delete("customers", created.id)

        again = self.repo.create("customers", CustomerCreate(code="CUS001", name="New owner"))

        self.assertTrue(again.ok)
        self.assertNotEqual(again.value.id, created.id)

    def test_store_index_rejects_duplicate(self):
        self.create_customer("CUS001")

        outcome = self.repo.create("customers", CustomerCreate(code="CUS001", name="Other"))

        self.assertEqual(outcome.status, OutcomeStatus.CONFLICT)
        self.assertEqual(outcome.message, "Customer code already exists")
        self.assertEqual(outcome.field, "code")
        self.assertEqual(self.repo.count("customers"), 1)

    def test_update_into_taken_email_is_a_conflict(self):
        self.create_customer("CUS001", email="a@shop.lk")
        second = self.create_customer("CUS002", email="b@shop.lk")

        outcome = self.repo.update("customers", second.id, CustomerUpdate(email="a@shop.lk"))

        self.assertEqual(outcome.status, OutcomeStatus.CONFLICT)
        self.assertEqual(outcome.message, "Customer email already exists")


class TestWrites(RepositoryTestCase):
    def test_update_merges_and_refreshes_timestamp(self):
        created = self.create_customer(city="Colombo")
        self.clock.advance(minutes=5)

        outcome = self.repo.update("customers", created.id, CustomerUpdate(name="Perera & Sons"))

        self.assertTrue(outcome.ok)
        self.assertEqual(outcome.value.name, "Perera & Sons")
        self.assertEqual(outcome.value.city, "Colombo")
        self.assertEqual(naive(outcome.value.created_at), naive(created.created_at))
        self.assertEqual(naive(outcome.value.updated_at), naive(self.clock.now))

    def test_replace_clears_fields_left_out(self):
        created = self.create_customer(email="a@shop.lk", city="Colombo", credit_limit="900")

        outcome = self.repo.update(
            "customers", created.id, CustomerCreate(code="CUS001", name="Perera"), replace=True
        )

        self.assertTrue(outcome.ok)
        self.assertIsNone(outcome.value.email)
        self.assertIsNone(outcome.value.city)
        self.assertEqual(outcome.value.credit_limit, 0)

    def test_update_missing_record_writes_nothing(self):
        self.create_customer()

        outcome = self.repo.update("customers", uuid4(), CustomerUpdate(name="Ghost"))

        self.assertEqual(outcome.status, OutcomeStatus.NOT_FOUND)
        self.assertEqual(self.repo.count("customers"), 1)
        self.assertEqual(self.repo.fetch_many("customers", {"name": "Ghost"}), [])

    def test_update_inactive_record_is_not_found(self):
        created = self.create_customer()
        self.repo.soft_delete("customers", created.id)

        outcome = self.repo.update("customers", created.id, CustomerUpdate(name="Revived"))

        self.assertEqual(outcome.status, OutcomeStatus.NOT_FOUND)
        stored = self.repo.fetch_one_unfiltered("customers", created.id).value
        self.assertFalse(stored.is_active)
        self.assertEqual(stored.name, created.name)

    def test_soft_delete_is_idempotent(self):
        created = self.create_customer()

        first = self.repo.soft_delete("customers", created.id)
        second = self.repo.soft_delete("customers", created.id)

        self.assertTrue(first.ok)
        self.assertTrue(second.ok)
        self.assertFalse(second.value.is_active)
        self.assertEqual(self.repo.count("customers"), 1)

    def test_soft_delete_unknown_id(self):
        outcome = self.repo.soft_delete("customers", uuid4())
        self.assertEqual(outcome.status, OutcomeStatus.NOT_FOUND)

    def test_create_requires_a_model(self):
        with self.assertRaises(TypeError):
            self.repo.create("customers", {"code": "CUS001", "name": "Perera"})


class TestReferences(RepositoryTestCase):
    def test_item_with_inactive_category_is_a_conflict(self):
        category = self.create_category()
        self.repo.soft_delete("categories", category.id)

        outcome = self.repo.create("items", self.item("Hammer", category.id))

        self.assertEqual(outcome.status, OutcomeStatus.CONFLICT)
        self.assertEqual(outcome.message, "Category does not exist or is inactive")
        self.assertEqual(outcome.field, "category_id")

    def test_item_with_unknown_category_is_a_conflict(self):
        outcome = self.repo.create("items", self.item("Hammer", uuid4()))
        self.assertEqual(outcome.status, OutcomeStatus.CONFLICT)

    def test_moving_item_to_inactive_category(self):
        tools = self.create_category("Tools")
        paint = self.create_category("Paint")
        hammer = self.repo.create("items", self.item("Hammer", tools.id)).value
        self.repo.soft_delete("categories", paint.id)

        outcome = self.repo.update("items", hammer.id, ItemUpdate(category_id=paint.id))

        self.assertEqual(outcome.status, OutcomeStatus.CONFLICT)
        self.assertEqual(self.repo.fetch_one("items", hammer.id).value.category_id, tools.id)


class TestBatches(RepositoryTestCase):
    def test_batch_create_inserts_all(self):
        values = [CustomerCreate(code=f"CUS00{i}", name=f"Customer {i}") for i in range(1, 4)]

        outcome = self.repo.batch_create("customers", values)

        self.assertTrue(outcome.ok)
        self.assertEqual(len(outcome.value), 3)
        self.assertEqual(self.repo.count_active("customers"), 3)

    def test_batch_create_rejects_duplicates_within_batch(self):
        values = [CustomerCreate(code="CUS001", name="One"), CustomerCreate(code="CUS001", name="Two")]

        outcome = self.repo.batch_create("customers", values)

        self.assertEqual(outcome.status, OutcomeStatus.CONFLICT)
        self.assertEqual(self.repo.count("customers"), 0)

    def test_batch_create_rolls_back_on_store_conflict(self):
        self.create_customer("CUS002")
        values = [CustomerCreate(code="CUS001", name="One"), CustomerCreate(code="CUS002", name="Two")]

        outcome = self.repo.batch_create("customers", values)

        self.assertEqual(outcome.status, OutcomeStatus.CONFLICT)
        self.assertEqual(outcome.field, "code")
        self.assertEqual(self.repo.count("customers"), 1)

    def test_batch_update_rolls_back_when_an_id_is_missing(self):
        first = self.create_customer("CUS001")

        outcome = self.repo.batch_update(
            "customers",
            [(first.id, CustomerUpdate(city="Galle")), (uuid4(), CustomerUpdate(city="Galle"))],
        )

        self.assertEqual(outcome.status, OutcomeStatus.NOT_FOUND)
        self.assertIsNone(self.repo.fetch_one("customers", first.id).value.city)

    def test_batch_update_applies_all(self):
        first = self.create_customer("CUS001")
        second = self.create_customer("CUS002")

        outcome = self.repo.batch_update(
            "customers",
            [(first.id, CustomerUpdate(city="Galle")), (second.id, CustomerUpdate(city="Matara"))],
        )

        self.assertTrue(outcome.ok)
        self.assertEqual([c.city for c in outcome.value], ["Galle", "Matara"])


class TestStoreFailures(RepositoryTestCase):
    def setUp(self):
        super().setUp()
        self.existing = self.create_customer()
        customers.drop(self.engine)

    def test_single_record_operations_report_errors(self):
        self.assertEqual(self.repo.fetch_one("customers", self.existing.id).status, OutcomeStatus.ERROR)
        self.assertEqual(
            self.repo.create("customers", CustomerCreate(code="CUS009", name="Late")).status,
            OutcomeStatus.ERROR,
        )
        self.assertEqual(self.repo.soft_delete("customers", self.existing.id).status, OutcomeStatus.ERROR)

    def test_generic_message(self):
        outcome = self.repo.fetch_one("customers", self.existing.id)
        self.assertEqual(outcome.message, "Something went wrong")

    def test_list_reads_raise(self):
        with self.assertRaises(PersistenceError):
            self.repo.fetch_many("customers")
        with self.assertRaises(PersistenceError):
            self.repo.check_unique("customers", "code", "CUS001")

    def test_ping_still_works(self):
        self.assertTrue(self.repo.ping())
