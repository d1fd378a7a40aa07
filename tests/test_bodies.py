from codebase_cli.bodies import XMLBody


def test_none_values_are_omitted():
    body = XMLBody("deployment").add("branch", "main").add("environment", None)

    assert body.render() == "<deployment><branch>main</branch></deployment>"


def test_elements_keep_insertion_order():
    body = XMLBody("project").add("name", "Both Updated").add("status", "archived")

    assert (
        body.render()
        == "<project><name>Both Updated</name><status>archived</status></project>"
    )


def test_text_is_xml_escaped():
    body = XMLBody("merge-request").add("subject", "Fix <b> & \"quotes\"")

    assert body.render() == (
        '<merge-request><subject>Fix &lt;b&gt; &amp; "quotes"</subject></merge-request>'
    )


def test_free_text_uses_cdata():
    body = XMLBody("ticket-note").add_text("content", "Use <code> & stuff")

    assert (
        body.render()
        == "<ticket-note><content><![CDATA[Use <code> & stuff]]></content></ticket-note>"
    )


def test_cdata_terminator_is_split():
    body = XMLBody("ticket").add_text("description", "a]]>b")

    assert body.render() == (
        "<ticket><description><![CDATA[a]]]]><![CDATA[>b]]></description></ticket>"
    )


def test_flag_only_emitted_when_set():
    assert XMLBody("n").add_flag("private", True).render() == "<n><private>1</private></n>"
    assert XMLBody("n").add_flag("private", False).render() == "<n></n>"


def test_bool_and_int_values_render_as_text():
    body = XMLBody("x").add("enabled", False).add("id", 12)

    assert body.render() == "<x><enabled>0</enabled><id>12</id></x>"


def test_nested_and_repeated_elements():
    users = XMLBody("users")
    for user_id in (201, 202):
        users.add_body(XMLBody("user").add("id", user_id))
    watchers = XMLBody("watchers").add_each("watcher", [42, 99])

    assert (
        users.render()
        == "<users><user><id>201</id></user><user><id>202</id></user></users>"
    )
    assert str(watchers) == "<watchers><watcher>42</watcher><watcher>99</watcher></watchers>"


def test_add_body_skips_none():
    assert XMLBody("ticket-note").add_body(None).render() == "<ticket-note></ticket-note>"


def test_add_body_skips_empty_child():
    body = XMLBody("ticket-note").add_text("content", "hi").add_body(XMLBody("changes"))

    assert body.render() == "<ticket-note><content><![CDATA[hi]]></content></ticket-note>"
