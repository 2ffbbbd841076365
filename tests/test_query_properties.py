"""
Property-based tests for RRI queries.

Uses Hypothesis for property-based testing to verify query construction,
key-value encoding and parsing.
"""

import string
from datetime import date

from hypothesis import given, settings
from hypothesis import strategies as st

from rri.config import LATEST_VERSION
from rri.enums import ErrorCode, QueryFormat
from rri.exceptions import (
    DuplicateFieldError,
    FieldListError,
    MalformedLineError,
    MissingFieldError,
    QueryParseError,
)
from rri.handle import DenicHandle
from rri.models import ContactData, DomainData, VerificationInformation
from rri.query import (
    Query,
    compute_hash_sha256,
    format_date,
    new_change_holder_query,
    new_change_provider_query,
    new_check_domain_query,
    new_check_handle_query,
    new_create_auth_info1_query,
    new_create_auth_info2_query,
    new_create_contact_query,
    new_create_domain_query,
    new_delete_domain_query,
    new_info_domain_query,
    new_info_handle_query,
    new_login_query,
    new_logout_query,
    new_query,
    new_queue_delete_query,
    new_queue_read_query,
    new_restore_domain_query,
    new_transit_domain_query,
    new_update_contact_query,
    new_update_domain_query,
    parse_query,
    parse_query_kv,
)
from rri.tokens import CONTACT_TYPE_PERSON


DOMAIN_DATA = DomainData(
    holder_handles=[DenicHandle(1000006, "holder")],
    general_request_handles=[DenicHandle(1000006, "request")],
    name_servers=["ns1.example.de"],
)

CONTACT = ContactData(
    type=CONTACT_TYPE_PERSON,
    name="Erika Mustermann",
    address="Musterstr. 1",
    postal_code="12345",
    city="Berlin",
    country_code="DE",
    email=["erika@example.de"],
    verification_information=[
        VerificationInformation(
            verified_claims=["name", "birthdate"],
            verification_result="success",
            verification_timestamp="2024-05-01T12:00:00Z",
        ),
    ],
)

HANDLE = DenicHandle(1000006, "erika")


def all_constructed_queries() -> list[tuple[Query, str]]:
    """One query per constructor together with its expected action."""
    return [
        (new_login_query("alice", "secret"), "LOGIN"),
        (new_logout_query(), "LOGOUT"),
        (new_create_contact_query(HANDLE, CONTACT), "CREATE"),
        (new_update_contact_query(HANDLE, CONTACT), "UPDATE"),
        (new_check_handle_query(HANDLE), "CHECK"),
        (new_info_handle_query(HANDLE), "INFO"),
        (new_create_domain_query("münchen.de", DOMAIN_DATA), "CREATE"),
        (new_check_domain_query("example.de"), "CHECK"),
        (new_info_domain_query("example.de"), "INFO"),
        (new_update_domain_query("example.de", DOMAIN_DATA), "UPDATE"),
        (new_change_holder_query("example.de", DOMAIN_DATA), "CHHOLDER"),
        (new_delete_domain_query("example.de"), "DELETE"),
        (new_restore_domain_query("example.de"), "RESTORE"),
        (new_transit_domain_query("example.de", True), "TRANSIT"),
        (new_create_auth_info1_query("example.de", "s3cret", date(2030, 1, 2)), "CREATE-AUTHINFO1"),
        (new_create_auth_info2_query("example.de"), "CREATE-AUTHINFO2"),
        (new_change_provider_query("example.de", "s3cret", DOMAIN_DATA), "CHPROV"),
        (new_queue_read_query(), "QUEUE-READ"),
        (new_queue_delete_query("4711"), "QUEUE-DELETE"),
    ]


def wire_value() -> st.SearchStrategy[str]:
    alphabet = string.ascii_letters + string.digits + " .-:@"
    return st.text(alphabet=alphabet, max_size=20).map(str.strip)


class TestQueryLayoutProperty:
    """
    **Property 1: version and action are always the first two fields**
    """

    def test_every_constructor_starts_with_version_and_action(self) -> None:
        for query, action in all_constructed_queries():
            entries = list(query.fields())
            assert entries[0].name == "version"
            assert entries[0].value == LATEST_VERSION
            assert entries[1].name == "action"
            assert entries[1].value == action
            assert query.version() == "5.0"
            assert query.action() == action

    @given(
        version=st.text(alphabet=string.digits + ".", min_size=1, max_size=5),
        action=st.text(alphabet=string.ascii_letters + "-", min_size=1, max_size=15),
    )
    @settings(max_examples=100)
    def test_new_query_normalizes_action(self, version: str, action: str) -> None:
        query = new_query(version, action)

        assert query.version() == version
        assert query.action() == action.upper()
        assert len(query.fields()) == 2

    def test_explicit_version_is_used(self) -> None:
        query = new_check_domain_query("example.de", version="4.0")

        assert query.first_field("version") == "4.0"

    def test_fields_returns_a_copy(self) -> None:
        query = new_logout_query()
        fields = query.fields()
        fields.add("extra", "value")

        assert len(query.fields()) == 2
        assert query.field("extra") == []


class TestQueryRoundTripProperty:
    """
    **Property 2: parse_query_kv(encode_kv(q)) == q**
    """

    def test_constructed_queries_round_trip(self) -> None:
        for query, _ in all_constructed_queries():
            assert parse_query_kv(query.encode_kv()) == query
            assert parse_query(query.encode_kv()) == query

    @given(username=wire_value(), password=wire_value())
    @settings(max_examples=100)
    def test_login_round_trip(self, username: str, password: str) -> None:
        query = new_login_query(username, password)

        parsed = parse_query_kv(query.encode_kv())

        assert parsed == query
        assert parsed.first_field("user") == username
        assert parsed.first_field("password") == password

    @given(name_servers=st.lists(
        st.from_regex(r"ns[0-9]\.[a-z]{1,8}\.de", fullmatch=True),
        max_size=5,
    ))
    @settings(max_examples=50)
    def test_multi_value_fields_survive_round_trip(self, name_servers: list[str]) -> None:
        query = new_update_domain_query("example.de", DomainData(name_servers=name_servers))

        parsed = parse_query_kv(query.encode_kv())

        assert parsed.field("nserver") == name_servers


class TestQueryEncoding:
    """Wire layout of individual actions."""

    def test_login_encoding(self) -> None:
        query = new_login_query("alice", "secret")

        assert query.encode_kv() == (
            "version: 5.0\n"
            "action: LOGIN\n"
            "user: alice\n"
            "password: secret"
        )

    def test_parse_login_example(self) -> None:
        query = parse_query_kv("version: 5.0\naction: login\nuser: alice\npassword: secret\n")

        assert query.action() == "LOGIN"
        assert query.first_field("user") == "alice"
        assert str(query) == 'LOGIN{"alice"}'

    def test_str_for_other_actions(self) -> None:
        assert str(new_logout_query()) == "LOGOUT{}"
        assert str(new_check_domain_query("example.de")) == "CHECK{}"

    def test_create_domain_encoding(self) -> None:
        query = new_create_domain_query("münchen.de", DOMAIN_DATA)

        assert query.encode_kv() == (
            "version: 5.0\n"
            "action: CREATE\n"
            "domain: münchen.de\n"
            "domain-ace: xn--mnchen-3ya.de\n"
            "holder: DENIC-1000006-HOLDER\n"
            "generalrequest: DENIC-1000006-REQUEST\n"
            "nserver: ns1.example.de"
        )

    def test_contact_query_starts_with_handle(self) -> None:
        query = new_create_contact_query(HANDLE, CONTACT)
        entries = list(query.fields())

        assert entries[2].name == "handle"
        assert entries[2].value == "DENIC-1000006-ERIKA"
        assert entries[3].name == "type"

    def test_transit_disconnect_flag(self) -> None:
        assert new_transit_domain_query("example.de", True).first_field("disconnect") == "true"
        assert new_transit_domain_query("example.de", False).first_field("disconnect") == "false"

    def test_auth_info1_sends_only_the_hash(self) -> None:
        query = new_create_auth_info1_query("example.de", "s3cret", date(2030, 1, 2))

        assert query.first_field("authinfohash") == (
            "1ec1c26b50d5d3c58d9583181af8076655fe00756bf7285940ba3670f99fcba0"
        )
        assert query.first_field("authinfoexpire") == "20300102"
        assert "s3cret" not in query.encode_kv()

    def test_change_provider_field_order(self) -> None:
        query = new_change_provider_query("example.de", "s3cret", DOMAIN_DATA)
        names = [entry.name for entry in query.fields()]

        assert names == [
            "version", "action", "domain", "domain-ace",
            "holder", "generalrequest", "nserver", "authinfo",
        ]
        assert query.first_field("authinfo") == "s3cret"

    def test_queue_message_type_is_optional(self) -> None:
        assert len(new_queue_read_query().fields()) == 2
        assert new_queue_read_query("authInfo2Notify").first_field("msgtype") == "authInfo2Notify"

        delete_query = new_queue_delete_query("4711", "expire")
        assert delete_query.first_field("msgid") == "4711"
        assert delete_query.first_field("msgtype") == "expire"
        assert new_queue_delete_query("4711").field("msgtype") == []


class TestQueryHelpersProperty:
    """
    **Property 3: Auth info hashes are lower-case hex and dates are 8 digits**
    """

    @given(text=st.text(max_size=50))
    @settings(max_examples=100)
    def test_hash_is_lower_case_hex(self, text: str) -> None:
        digest = compute_hash_sha256(text)

        assert len(digest) == 64
        assert all(c in "0123456789abcdef" for c in digest)

    @given(day=st.dates(min_value=date(1000, 1, 1)))
    @settings(max_examples=100)
    def test_date_is_yyyymmdd(self, day: date) -> None:
        formatted = format_date(day)

        assert len(formatted) == 8
        assert formatted.isdigit()
        assert formatted == day.strftime("%Y%m%d")


class TestQueryParseErrorsProperty:
    """
    **Property 4: version and action must appear exactly once**
    """

    def test_missing_version(self) -> None:
        try:
            parse_query_kv("action: LOGIN\nuser: alice")
            assert False, "Should have raised MissingFieldError"
        except MissingFieldError as e:
            assert e.code == ErrorCode.MISSING_FIELD.value
            assert e.details["field"] == "version"
            assert e.message == "version key is missing"

    def test_missing_action(self) -> None:
        try:
            parse_query_kv("version: 5.0")
            assert False, "Should have raised MissingFieldError"
        except MissingFieldError as e:
            assert e.details["field"] == "action"

    @given(count=st.integers(min_value=2, max_value=5))
    @settings(max_examples=10)
    def test_duplicate_action(self, count: int) -> None:
        text = "version: 5.0\n" + "\n".join(["action: INFO"] * count)

        try:
            parse_query_kv(text)
            assert False, "Should have raised DuplicateFieldError"
        except DuplicateFieldError as e:
            assert e.code == ErrorCode.DUPLICATE_FIELD.value
            assert e.message == "multiple action values"

    def test_malformed_line(self) -> None:
        try:
            parse_query_kv("version: 5.0\naction: INFO\nthis line is broken")
            assert False, "Should have raised MalformedLineError"
        except MalformedLineError as e:
            assert e.details["line_number"] == 3

    def test_empty_text_is_missing_version(self) -> None:
        try:
            parse_query("")
            assert False, "Should have raised MissingFieldError"
        except QueryParseError as e:
            assert e.code == ErrorCode.MISSING_FIELD.value

    def test_explicit_key_value_format(self) -> None:
        query = parse_query("version: 5.0\naction: LOGOUT", QueryFormat.KV)

        assert query == new_logout_query()


class TestSingleLineValuesProperty:
    """
    **Property 5: Constructors never emit values that span wire lines**
    """

    @given(
        injected=st.sampled_from(["\naction: DELETE", "\r\nversion: 1.0", "\rholder: DENIC-1-X"]),
    )
    @settings(max_examples=10)
    def test_line_break_in_contact_name_is_rejected(self, injected: str) -> None:
        contact = ContactData(type=CONTACT_TYPE_PERSON, name="Erika" + injected)

        try:
            new_create_contact_query(HANDLE, contact)
            assert False, "Should have raised FieldListError"
        except FieldListError as e:
            assert e.code == ErrorCode.INVALID_FIELD.value

    def test_line_break_in_login_user_is_rejected(self) -> None:
        try:
            new_login_query("alice\naction: LOGOUT", "secret")
            assert False, "Should have raised FieldListError"
        except FieldListError:
            pass

    def test_multiline_address_is_split_not_rejected(self) -> None:
        contact = ContactData(type=CONTACT_TYPE_PERSON, address="Musterstr. 1\nHinterhaus")

        query = new_create_contact_query(HANDLE, contact)

        assert query.field("address") == ["Musterstr. 1", "Hinterhaus"]
        assert parse_query_kv(query.encode_kv()) == query

    def test_contact_with_verification_round_trips(self) -> None:
        query = new_create_contact_query(HANDLE, CONTACT)

        parsed = parse_query_kv(query.encode_kv())

        assert parsed == query
        assert "[verificationinformation]" in query.encode_kv()
        entities = parsed.entities()
        assert len(entities) == 1
        assert entities[0][1].values("verifiedclaim") == ["name", "birthdate"]
