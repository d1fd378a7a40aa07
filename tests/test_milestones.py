import pytest
import respx
from httpx import Response
from codebase_cli.client import CodebaseClient, Connection
from codebase_cli.resources.milestones import (
    create_milestone,
    list_milestones,
    update_milestone,
)

BASE = "https://mock-cb.com"

MILESTONE_XML = """<ticketing-milestone>
  <id type="integer">7</id>
  <name>Sprint 1</name>
  <description></description>
  <start-at type="date">2026-01-01</start-at>
  <deadline type="date">2026-01-14</deadline>
  <parent-id type="integer"></parent-id>
  <estimated-time type="float">40.5</estimated-time>
  <responsible-user-id type="integer">3</responsible-user-id>
  <status>active</status>
</ticketing-milestone>"""


@pytest.fixture
def client():
    return CodebaseClient(
        Connection(account="acme", username="dev", api_key="k", base_url=BASE)
    )


@pytest.mark.asyncio
@respx.mock
async def test_list_milestones(client):
    respx.get(f"{BASE}/test-project/milestones").mock(
        return_value=Response(
            200, text=f"<ticketing-milestones>{MILESTONE_XML}</ticketing-milestones>"
        )
    )

    async with client:
        milestones = await list_milestones(client, "test-project")

    m = milestones[0]
    assert m.id == 7
    assert m.start_at == "2026-01-01"
    assert m.description is None
    assert m.parent_id is None
    assert m.estimated_time == 40.5
    assert m.responsible_user_id == 3


@pytest.mark.asyncio
@respx.mock
async def test_list_milestones_empty(client):
    respx.get(f"{BASE}/test-project/milestones").mock(
        return_value=Response(200, text="<ticketing-milestones></ticketing-milestones>")
    )

    async with client:
        assert await list_milestones(client, "test-project") == []


@pytest.mark.asyncio
@respx.mock
async def test_create_milestone_body(client):
    route = respx.post(f"{BASE}/test-project/milestones").mock(
        return_value=Response(201, text=MILESTONE_XML)
    )

    async with client:
        milestone = await create_milestone(
            client,
            "test-project",
            name="Sprint 1",
            start_at="2026-01-01",
            deadline="2026-01-14",
            responsible_user_id=3,
        )

    assert milestone.name == "Sprint 1"
    assert route.calls[0].request.content.decode() == (
        "<ticketing-milestone>"
        "<name>Sprint 1</name>"
        "<start-at>2026-01-01</start-at>"
        "<deadline>2026-01-14</deadline>"
        "<responsible-user-id>3</responsible-user-id>"
        "</ticketing-milestone>"
    )


@pytest.mark.asyncio
@respx.mock
async def test_update_milestone_sends_only_given_fields(client):
    route = respx.put(f"{BASE}/test-project/milestones/7").mock(
        return_value=Response(200, text=MILESTONE_XML)
    )

    async with client:
        await update_milestone(client, "test-project", 7, status="completed")

    assert route.calls[0].request.content.decode() == (
        "<ticketing-milestone><status>completed</status></ticketing-milestone>"
    )
