from notifications.modal import MessageModal


def test_new_message_replaces_open_one():
    modal = MessageModal()
    modal.show("primeira")
    modal.show("segunda")

    assert modal.is_open
    assert modal.message == "segunda"


def test_only_acknowledgment_closes():
    seen = []
    modal = MessageModal()
    modal.subscribe(seen.append)

    modal.show("oi")
    assert modal.is_open
    modal.close()

    assert not modal.is_open
    assert [state.is_open for state in seen] == [True, False]
