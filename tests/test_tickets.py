import pytest
import respx
from httpx import Response
from codebase_cli.client import CodebaseClient, Connection
from codebase_cli.errors import CodebaseDecodeError
from codebase_cli.models import NoteChanges
from codebase_cli.resources.tickets import (
    create_ticket,
    create_ticket_note,
    list_categories,
    list_priorities,
    list_statuses,
    list_ticket_notes,
    list_tickets,
    list_types,
    list_watchers,
    search_tickets,
    set_watchers,
)

BASE = "https://mock-cb.com"

TICKET_XML = """<ticket>
  <ticket-id type="integer">99</ticket-id>
  <summary>Crash on save</summary>
  <ticket-type>bug</ticket-type>
  <priority-id type="integer">2</priority-id>
  <milestone-id type="integer"></milestone-id>
</ticket>"""


@pytest.fixture
def client():
    return CodebaseClient(
        Connection(account="acme", username="dev", api_key="k", base_url=BASE)
    )


@pytest.mark.asyncio
@respx.mock
async def test_list_tickets(client):
    respx.get(f"{BASE}/test-project/tickets").mock(
        return_value=Response(200, text=f"<tickets>{TICKET_XML}</tickets>")
    )

    async with client:
        tickets = await list_tickets(client, "test-project")

    assert len(tickets) == 1
    assert tickets[0].ticket_id == 99
    assert tickets[0].milestone_id is None


@pytest.mark.asyncio
@respx.mock
async def test_search_tickets_encodes_query(client):
    route = respx.get(f"{BASE}/test-project/tickets").mock(
        return_value=Response(200, text="<tickets></tickets>")
    )

    async with client:
        tickets = await search_tickets(client, "test-project", "status:open")

    assert tickets == []
    request = route.calls[0].request
    assert request.url.params["query"] == "status:open"


@pytest.mark.asyncio
@respx.mock
async def test_search_tickets_with_spaces(client):
    route = respx.get(f"{BASE}/test-project/tickets").mock(
        return_value=Response(200, text="<tickets/>")
    )

    async with client:
        await search_tickets(client, "test-project", "status:open assignee:me")

    assert route.calls[0].request.url.params["query"] == "status:open assignee:me"


@pytest.mark.asyncio
@respx.mock
async def test_create_ticket_minimal_body(client):
    route = respx.post(f"{BASE}/test-project/tickets").mock(
        return_value=Response(201, text=TICKET_XML)
    )

    async with client:
        ticket = await create_ticket(
            client, "test-project", summary="Crash on save", ticket_type="bug"
        )

    assert ticket.ticket_id == 99
    assert route.calls[0].request.content.decode() == (
        "<ticket><summary>Crash on save</summary><ticket-type>bug</ticket-type></ticket>"
    )


@pytest.mark.asyncio
@respx.mock
async def test_create_ticket_full_body(client):
    route = respx.post(f"{BASE}/test-project/tickets").mock(
        return_value=Response(201, text=TICKET_XML)
    )

    async with client:
        await create_ticket(
            client,
            "test-project",
            summary="Crash on save",
            ticket_type="bug",
            priority_id=2,
            status_id=1,
            description="Steps: <click> save",
            assignee_id=7,
            category_id=4,
            milestone_id=5,
            tags="ui crash",
        )

    assert route.calls[0].request.content.decode() == (
        "<ticket>"
        "<summary>Crash on save</summary>"
        "<ticket-type>bug</ticket-type>"
        "<priority-id>2</priority-id>"
        "<status-id>1</status-id>"
        "<description><![CDATA[Steps: <click> save]]></description>"
        "<assignee-id>7</assignee-id>"
        "<category-id>4</category-id>"
        "<milestone-id>5</milestone-id>"
        "<tags>ui crash</tags>"
        "</ticket>"
    )


@pytest.mark.asyncio
@respx.mock
async def test_list_ticket_notes(client):
    respx.get(f"{BASE}/test-project/tickets/99/notes").mock(
        return_value=Response(
            200,
            text="""<ticket-notes>
              <ticket-note>
                <id type="integer">1</id>
                <content>Looking into it</content>
                <changes></changes>
              </ticket-note>
            </ticket-notes>""",
        )
    )

    async with client:
        notes = await list_ticket_notes(client, "test-project", 99)

    assert notes[0].content == "Looking into it"
    assert notes[0].changes is None


@pytest.mark.asyncio
@respx.mock
async def test_create_ticket_note_with_changes(client):
    route = respx.post(f"{BASE}/test-project/tickets/99/notes").mock(
        return_value=Response(
            201, text="<ticket-note><id type=\"integer\">5</id></ticket-note>"
        )
    )

    async with client:
        note = await create_ticket_note(
            client,
            "test-project",
            99,
            content="Fixed in main",
            changes=NoteChanges(status_id=3, assignee_id=7),
            private=True,
        )

    assert note.id == 5
    assert route.calls[0].request.content.decode() == (
        "<ticket-note>"
        "<content><![CDATA[Fixed in main]]></content>"
        "<private>1</private>"
        "<changes><status-id>3</status-id><assignee-id>7</assignee-id></changes>"
        "</ticket-note>"
    )


@pytest.mark.asyncio
@respx.mock
async def test_create_ticket_note_omits_changes_without_values(client):
    route = respx.post(f"{BASE}/test-project/tickets/99/notes").mock(
        return_value=Response(201, text="<ticket-note><id>6</id></ticket-note>")
    )

    async with client:
        await create_ticket_note(
            client, "test-project", 99, content="ok", changes=NoteChanges(subject="  ")
        )

    assert route.calls[0].request.content.decode() == (
        "<ticket-note><content><![CDATA[ok]]></content></ticket-note>"
    )


@pytest.mark.asyncio
@respx.mock
async def test_create_ticket_note_content_only(client):
    route = respx.post(f"{BASE}/test-project/tickets/99/notes").mock(
        return_value=Response(201, text="<ticket-note><id>6</id></ticket-note>")
    )

    async with client:
        await create_ticket_note(client, "test-project", 99, content="Ping")

    assert route.calls[0].request.content.decode() == (
        "<ticket-note><content><![CDATA[Ping]]></content></ticket-note>"
    )


@pytest.mark.asyncio
@respx.mock
async def test_watchers_roundtrip(client):
    respx.get(f"{BASE}/test-project/tickets/99/watchers").mock(
        return_value=Response(
            200,
            text="""<watchers>
              <watcher><watcher type="integer">42</watcher></watcher>
            </watchers>""",
        )
    )
    set_route = respx.post(f"{BASE}/test-project/tickets/99/watchers").mock(
        return_value=Response(200)
    )

    async with client:
        watchers = await list_watchers(client, "test-project", 99)
        await set_watchers(client, "test-project", 99, [42, 43])

    assert [w.watcher for w in watchers] == [42]
    assert set_route.calls[0].request.content.decode() == (
        "<watchers><watcher>42</watcher><watcher>43</watcher></watchers>"
    )


@pytest.mark.asyncio
@respx.mock
async def test_ticket_metadata_lists(client):
    respx.get(f"{BASE}/p/tickets/statuses").mock(
        return_value=Response(
            200,
            text="""<ticketing-statuses><ticketing-status>
              <id>1</id><name>New</name><background-colour>green</background-colour>
              <order>1</order><treat-as-closed>false</treat-as-closed>
            </ticketing-status></ticketing-statuses>""",
        )
    )
    respx.get(f"{BASE}/p/tickets/priorities").mock(
        return_value=Response(
            200,
            text="""<ticketing-priorities><ticketing-priority>
              <id>2</id><name>High</name><default>true</default><position>1</position>
            </ticketing-priority></ticketing-priorities>""",
        )
    )
    respx.get(f"{BASE}/p/tickets/categories").mock(
        return_value=Response(
            200,
            text="""<ticketing-categories><ticketing-category>
              <id>3</id><name>General</name>
            </ticketing-category></ticketing-categories>""",
        )
    )
    respx.get(f"{BASE}/p/tickets/types").mock(
        return_value=Response(
            200,
            text="""<ticketing-types><ticketing-type>
              <id>4</id><name>Bug</name><icon></icon>
            </ticketing-type></ticketing-types>""",
        )
    )

    async with client:
        statuses = await list_statuses(client, "p")
        priorities = await list_priorities(client, "p")
        categories = await list_categories(client, "p")
        types = await list_types(client, "p")

    assert statuses[0].treat_as_closed is False
    assert statuses[0].order == 1
    assert priorities[0].default is True
    assert categories[0].name == "General"
    assert types[0].icon is None


@pytest.mark.asyncio
@respx.mock
async def test_invalid_integer_in_response_raises_decode_error(client):
    respx.get(f"{BASE}/test-project/tickets").mock(
        return_value=Response(
            200, text="<tickets><ticket><ticket-id>abc</ticket-id></ticket></tickets>"
        )
    )

    async with client:
        with pytest.raises(CodebaseDecodeError) as exc:
            await list_tickets(client, "test-project")

    assert exc.value.field == "ticket-id"
    assert exc.value.raw_text == "abc"
