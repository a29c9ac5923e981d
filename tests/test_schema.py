import pytest
from strawberry.extensions import ParserCache, QueryDepthLimiter, ValidationCache

from relaypager.schema.schema import schema

CHILDREN_QUERY = """
    query Children($first: Int, $last: Int, $before: String, $after: String) {
        children(first: $first, last: $last, before: $before, after: $after) {
            pageInfo {
                startCursor
                endCursor
                hasNextPage
                hasPreviousPage
            }
            edges {
                cursor
                node {
                    name
                }
            }
            nodes {
                id
            }
        }
    }
"""


@pytest.fixture
async def children(test_db):
    for name in ["Joanne", "Bupkiss", "Kline", "Bootsy", "Mary"]:
        result = await schema.execute(
            'mutation { createChild(input: {name: "NAME"}) { id } }'.replace(
                "NAME", name
            )
        )
        assert not result.errors
    return test_db


def names(connection):
    return [edge["node"]["name"] for edge in connection["edges"]]


async def test_children_first(children):
    result = await schema.execute(CHILDREN_QUERY, variable_values={"first": 2})
    assert not result.errors
    connection = result.data["children"]
    assert names(connection) == ["Joanne", "Bupkiss"]
    assert connection["nodes"] == [{"id": "children:1"}, {"id": "children:2"}]
    assert connection["pageInfo"]["hasNextPage"]
    assert not connection["pageInfo"]["hasPreviousPage"]
    assert connection["pageInfo"]["endCursor"] == connection["edges"][-1]["cursor"]


async def test_children_next_page(children):
    first_page = await schema.execute(CHILDREN_QUERY, variable_values={"first": 2})
    end_cursor = first_page.data["children"]["pageInfo"]["endCursor"]
    result = await schema.execute(
        CHILDREN_QUERY, variable_values={"first": 5, "after": end_cursor}
    )
    assert not result.errors
    connection = result.data["children"]
    assert names(connection) == ["Kline", "Bootsy", "Mary"]
    assert connection["pageInfo"]["hasPreviousPage"]
    assert not connection["pageInfo"]["hasNextPage"]


async def test_children_last_counts_rows(children):
    result = await schema.execute(CHILDREN_QUERY, variable_values={"last": 2})
    assert not result.errors
    connection = result.data["children"]
    assert names(connection) == ["Bootsy", "Mary"]
    assert connection["pageInfo"]["hasPreviousPage"]
    assert not connection["pageInfo"]["hasNextPage"]


@pytest.fixture
def executed(test_db, monkeypatch):
    """
    Names of the `databases` calls the resolvers make, in order.
    """
    calls = []
    db = test_db.database
    for name in ["fetch_all", "fetch_one", "fetch_val"]:
        method = getattr(db, name)

        def record(*args, _name=name, _method=method, **kwargs):
            calls.append(_name)
            return _method(*args, **kwargs)

        monkeypatch.setattr(db, name, record)
    return calls


async def test_children_last_queries(children, executed):
    result = await schema.execute(CHILDREN_QUERY, variable_values={"last": 2})
    assert not result.errors
    assert executed == ["fetch_val", "fetch_all"]


async def test_children_last_empty_table_skips_fetch(executed):
    result = await schema.execute(CHILDREN_QUERY, variable_values={"last": 2})
    assert not result.errors
    assert result.data["children"]["edges"] == []
    assert not result.data["children"]["pageInfo"]["hasPreviousPage"]
    assert executed == ["fetch_val"]


async def test_children_first_skips_count(children, executed):
    result = await schema.execute(CHILDREN_QUERY, variable_values={"first": 2})
    assert not result.errors
    assert executed == ["fetch_all"]


async def test_children_last_before(children):
    page = await schema.execute(CHILDREN_QUERY, variable_values={"last": 1})
    start_cursor = page.data["children"]["pageInfo"]["startCursor"]
    result = await schema.execute(
        CHILDREN_QUERY, variable_values={"last": 2, "before": start_cursor}
    )
    assert not result.errors
    assert names(result.data["children"]) == ["Kline", "Bootsy"]


async def test_children_first_and_last(children):
    result = await schema.execute(
        CHILDREN_QUERY, variable_values={"first": 1, "last": 1}
    )
    assert result.errors[0].message == (
        "Passing both `first` and `last` values to paginate the connection is not "
        "supported."
    )


async def test_children_invalid_cursor(children):
    result = await schema.execute(
        CHILDREN_QUERY, variable_values={"first": 1, "after": "children:1"}
    )
    assert result.errors[0].message == "Invalid cursor provided as `after` argument"


async def test_node(children):
    query = """
        query {
            node(id: "children:3") {
                id
                ... on Child {
                    name
                }
            }
        }
    """
    result = await schema.execute(query)
    assert not result.errors
    assert result.data["node"] == {"id": "children:3", "name": "Kline"}


async def test_node_missing(test_db):
    result = await schema.execute('query { node(id: "children:42") { id } }')
    assert not result.errors
    assert result.data["node"] is None


def test_extensions_are_built_per_operation():
    built = [extension() for extension in schema.extensions]
    assert [type(extension) for extension in built[:3]] == [
        ParserCache,
        QueryDepthLimiter,
        ValidationCache,
    ]
    assert built[0] is not schema.extensions[0]()
