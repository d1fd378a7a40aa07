import pytest
from codebase_cli.errors import CodebaseDecodeError
from codebase_cli.mapper import decode, decode_list, element_to_dict, parse_document
from codebase_cli.models import (
    Branch,
    Commit,
    Event,
    Milestone,
    Project,
    Ticket,
    TicketNote,
    TicketStatus,
    Watcher,
)

PROJECT_XML = """<?xml version="1.0" encoding="UTF-8"?>
<project>
  <name>Test Project</name>
  <account-name>test-account</account-name>
  <permalink>test-project</permalink>
  <project-id type="integer">1</project-id>
  <group-id></group-id>
  <overview></overview>
  <status>active</status>
  <icon type="integer">3</icon>
  <disk-usage type="integer">1024</disk-usage>
  <total-tickets type="integer">10</total-tickets>
  <open-tickets type="integer">4</open-tickets>
  <closed-tickets type="integer">6</closed-tickets>
</project>
"""


def test_decode_single_record_with_empty_elements():
    project = decode(Project, PROJECT_XML)

    assert project.name == "Test Project"
    assert project.permalink == "test-project"
    assert project.project_id == 1
    assert project.group_id is None
    assert project.overview is None
    assert project.open_tickets == 4
    assert project.closed_tickets == 6
    assert project.total_tickets == 10


def test_absent_elements_decode_to_none():
    project = decode(Project, "<project><name>Only Name</name></project>")

    assert project.name == "Only Name"
    assert project.permalink is None
    assert project.total_tickets is None


def test_empty_element_and_absent_element_are_indistinguishable():
    empty = decode(Project, "<project><group-id></group-id></project>")
    self_closing = decode(Project, "<project><group-id/></project>")
    absent = decode(Project, "<project></project>")

    assert empty.group_id is None
    assert self_closing.group_id is None
    assert absent.group_id is None


def test_unknown_elements_are_ignored():
    project = decode(
        Project, "<project><name>A</name><brand-new-field>x</brand-new-field></project>"
    )

    assert project.name == "A"


def test_decode_list_of_tickets():
    xml = """<tickets>
      <ticket>
        <ticket-id type="integer">1</ticket-id>
        <summary>First ticket</summary>
        <ticket-type>bug</ticket-type>
        <assignee-id type="integer"></assignee-id>
      </ticket>
      <ticket>
        <ticket-id type="integer">2</ticket-id>
        <summary>Second ticket</summary>
        <ticket-type>task</ticket-type>
        <assignee-id type="integer">7</assignee-id>
      </ticket>
    </tickets>"""

    tickets = decode_list(Ticket, xml)

    assert [t.ticket_id for t in tickets] == [1, 2]
    assert tickets[0].summary == "First ticket"
    assert tickets[0].assignee_id is None
    assert tickets[1].assignee_id == 7


def test_empty_wrapper_decodes_to_empty_list():
    assert decode_list(Milestone, "<ticketing-milestones></ticketing-milestones>") == []
    assert decode_list(Milestone, '<ticketing-milestones type="array"/>') == []


def test_malformed_scalar_raises_with_field_name():
    with pytest.raises(CodebaseDecodeError) as exc:
        decode(Project, "<project><open-tickets>lots</open-tickets></project>")

    assert exc.value.field == "open-tickets"
    assert exc.value.raw_text == "lots"


def test_underscored_number_is_not_a_valid_int():
    xml = "<ticketing-status><id>1</id><order>1_0</order></ticketing-status>"

    with pytest.raises(CodebaseDecodeError) as exc:
        decode(TicketStatus, xml)

    assert exc.value.field == "order"
    assert exc.value.raw_text == "1_0"


def test_malformed_scalar_in_one_list_item_fails_the_document():
    xml = """<tickets>
      <ticket><ticket-id>1</ticket-id></ticket>
      <ticket><ticket-id>two</ticket-id></ticket>
    </tickets>"""

    with pytest.raises(CodebaseDecodeError):
        decode_list(Ticket, xml)


def test_malformed_xml_raises_decode_error():
    with pytest.raises(CodebaseDecodeError) as exc:
        decode(Project, "<project><name>unterminated</project>")

    assert "malformed XML" in exc.value.reason


def test_empty_body_raises_decode_error():
    with pytest.raises(CodebaseDecodeError) as exc:
        decode(Project, "   ")

    assert exc.value.reason == "empty response body"


def test_wrong_root_element_raises_decode_error():
    with pytest.raises(CodebaseDecodeError) as exc:
        decode_list(Ticket, "<projects></projects>")

    assert "<tickets>" in exc.value.reason


def test_explicit_wrapper_and_item_override_model_defaults():
    xml = "<results><item><ticket-id>5</ticket-id></item></results>"

    tickets = decode_list(Ticket, xml, wrapper="results", item="item")

    assert tickets[0].ticket_id == 5


def test_bool_fields_decode():
    xml = """<ticketing-statuses>
      <ticketing-status>
        <id type="integer">1</id><name>New</name><treat-as-closed>false</treat-as-closed>
      </ticketing-status>
      <ticketing-status>
        <id type="integer">2</id><name>Closed</name><treat-as-closed>true</treat-as-closed>
      </ticketing-status>
      <ticketing-status>
        <id type="integer">3</id><name>Unknown</name><treat-as-closed></treat-as-closed>
      </ticketing-status>
    </ticketing-statuses>"""

    statuses = decode_list(TicketStatus, xml)

    assert [s.treat_as_closed for s in statuses] == [False, True, None]


def test_float_field_decodes():
    xml = """<ticketing-milestone>
      <id type="integer">1</id>
      <name>Sprint 1</name>
      <estimated-time type="float">12.5</estimated-time>
    </ticketing-milestone>"""

    assert decode(Milestone, xml).estimated_time == 12.5


def test_renamed_fields_use_wire_names():
    commit = decode(
        Commit, "<commit><ref>abc123</ref><message>Fix bug\n\nDetails</message></commit>"
    )
    event = decode(Event, "<event><type>ticket_creation</type><title>T</title></event>")

    assert commit.commit_ref == "abc123"
    assert commit.headline == "Fix bug"
    assert event.event_type == "ticket_creation"


def test_watchers_nested_value():
    xml = """<watchers>
      <watcher><watcher type="integer">42</watcher></watcher>
      <watcher><watcher type="integer">99</watcher></watcher>
    </watchers>"""

    assert [w.watcher for w in decode_list(Watcher, xml)] == [42, 99]


def test_watchers_leaf_value():
    xml = "<watchers><watcher>42</watcher></watchers>"

    assert [w.watcher for w in decode_list(Watcher, xml)] == [42]


def test_ticket_note_changes():
    xml = """<ticket-notes>
      <ticket-note>
        <id type="integer">1</id>
        <content>Status change</content>
        <changes><status-id>3</status-id><subject></subject></changes>
        <private>1</private>
      </ticket-note>
      <ticket-note>
        <id type="integer">2</id>
        <content>Just a comment</content>
        <changes></changes>
      </ticket-note>
    </ticket-notes>"""

    first, second = decode_list(TicketNote, xml)

    assert first.changes is not None
    assert first.changes.status_id == 3
    assert first.changes.subject is None
    assert first.private is True
    assert second.changes is None
    assert second.private is None


def test_branch_name_defaults_to_empty_string():
    branches = decode_list(Branch, "<branches><branch><name/></branch></branches>")

    assert branches[0].name == ""


def test_element_to_dict_ignores_attributes_and_nests_children():
    elem = parse_document(
        '<project><name type="string">A</name><meta><x>1</x></meta><blank/></project>'
    )

    assert element_to_dict(elem) == {"name": "A", "meta": {"x": "1"}, "blank": ""}


def test_to_wire_dict_uses_element_names():
    project = decode(Project, "<project><open-tickets>3</open-tickets></project>")

    data = project.to_wire_dict()

    assert data["open-tickets"] == 3
    assert data["group-id"] is None
    assert "open_tickets" not in data
