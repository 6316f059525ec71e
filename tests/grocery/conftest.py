import pytest
from protean import current_domain
from protean.integrations.pytest import DomainFixture


@pytest.fixture(scope="session")
def grocery_bed():
    from grocery.domain import grocery
    from grocery.utils.db import drop_db, setup_db

    bed = DomainFixture(grocery)
    bed.setup()
    setup_db(grocery)
    yield bed
    drop_db(grocery)
    bed.teardown()


@pytest.fixture(autouse=True)
def _ctx(grocery_bed):
    from grocery.order.status import reset_transition_policy
    from grocery.stock.locks import reset_lock_manager

    with grocery_bed.domain_context():
        yield

        # Clear all databases and the event store between tests
        for _, provider in current_domain.providers.items():
            provider._data_reset()
        current_domain.event_store.store._data_reset()

    reset_lock_manager()
    reset_transition_policy()


@pytest.fixture()
def add_product():
    """Factory: persist a product and return its id."""
    from grocery.catalogue.management import AddProduct

    def _add(name="Bananas", selling_price=79, cost_price=40, num_of_stock=10):
        return current_domain.process(
            AddProduct(
                name=name,
                selling_price=selling_price,
                cost_price=cost_price,
                num_of_stock=num_of_stock,
            ),
            asynchronous=False,
        )

    return _add
