import pytest

from payqr.presets import emvco_preset
from payqr.schemas import TLV, EmvcoConfig, TLVContainer
from payqr.services import editor
from payqr.services.errors import ServiceError


@pytest.fixture
def blank():
    return emvco_preset("blank")


def _ids(tags):
    return [tag.id for tag in tags]


def test_add_predefined_scheme(blank):
    updated = editor.add_predefined_scheme(blank, "paynow")

    assert blank.schemes == []
    container = updated.schemes[0]
    assert container.id == 26
    assert container.label == "PayNow"
    assert container.scheme_key == "paynow"
    assert _ids(container.tags) == ["00", "01", "02", "03", "04", "05"]
    assert container.tags[0].value == "SG.PAYNOW"


def test_add_predefined_scheme_rejects_duplicates_and_unknown(blank):
    updated = editor.add_predefined_scheme(blank, "paynow")
    with pytest.raises(ServiceError) as exc:
        editor.add_predefined_scheme(updated, "paynow")
    assert exc.value.code == "ERR_SCHEME_IN_USE"

    with pytest.raises(ServiceError) as exc:
        editor.add_predefined_scheme(updated, "nope")
    assert exc.value.code == "ERR_UNKNOWN_SCHEME"
    assert exc.value.status_code == 404


def test_next_sequential_id():
    assert editor.next_sequential_id([]) == 26
    assert editor.next_sequential_id([TLVContainer(id=26), TLVContainer(id=30)]) == 31
    assert editor.next_sequential_id([TLVContainer(id=51)]) == 51


def test_next_sub_tag_id():
    assert editor.next_sub_tag_id([]) == "00"
    assert editor.next_sub_tag_id([TLV(id="00"), TLV(id="03")]) == "04"
    assert editor.next_sub_tag_id([TLV(id="99")]) == "99"


def test_add_custom_scheme():
    config = editor.add_custom_scheme(emvco_preset("paynow"))
    custom = config.schemes[-1]
    assert custom.id == 27
    assert custom.label == "Custom"
    assert custom.scheme_key is None
    assert [(tag.id, tag.value) for tag in custom.tags] == [("00", "")]


def test_update_scheme():
    config = editor.add_custom_scheme(emvco_preset("blank"))
    updated = editor.update_scheme(config, 0, id=99, label="Wallet")
    assert updated.schemes[0].id == 51
    assert updated.schemes[0].label == "Wallet"


def test_registry_scheme_id_and_label_are_locked():
    with pytest.raises(ServiceError) as exc:
        editor.update_scheme(emvco_preset("paynow"), 0, label="Other")
    assert exc.value.code == "ERR_LOCKED"


def test_remove_and_move_schemes(blank):
    config = editor.add_predefined_scheme(blank, "paynow")
    config = editor.add_predefined_scheme(config, "fave")
    moved = editor.move_scheme(config, 1, 0)
    assert [scheme.scheme_key for scheme in moved.schemes] == ["fave", "paynow"]
    removed = editor.remove_scheme(moved, 0)
    assert [scheme.scheme_key for scheme in removed.schemes] == ["paynow"]


def test_add_scheme_tag_uses_registry_default():
    config = editor.add_scheme_tag(emvco_preset("paynow"), 0)
    assert config.schemes[0].tags[-1] == TLV(id="02", value="")

    config = editor.add_scheme_tag(config, 0)
    assert config.schemes[0].tags[-1] == TLV(id="03", value="0")


def test_update_scheme_tag(blank):
    config = editor.add_predefined_scheme(blank, "paynow")
    updated = editor.update_scheme_tag(config, 0, 2, "+6591234567")
    assert updated.schemes[0].tags[2].value == "+6591234567"

    with pytest.raises(ServiceError) as exc:
        editor.update_scheme_tag(config, 0, 0, "SG.OTHER")
    assert exc.value.code == "ERR_LOCKED"


def test_remove_scheme_tag(blank):
    config = editor.add_predefined_scheme(blank, "paynow")
    updated = editor.remove_scheme_tag(config, 0, 4)
    assert _ids(updated.schemes[0].tags) == ["00", "01", "02", "03", "05"]

    for locked in (0, 1, 2):
        with pytest.raises(ServiceError) as exc:
            editor.remove_scheme_tag(config, 0, locked)
        assert exc.value.code == "ERR_LOCKED"


def test_custom_scheme_identifier_is_removable():
    config = editor.add_custom_scheme(emvco_preset("blank"))
    assert editor.remove_scheme_tag(config, 0, 0).schemes[0].tags == []


def test_move_scheme_tag(blank):
    config = editor.add_predefined_scheme(blank, "paynow")
    moved = editor.move_scheme_tag(config, 0, 5, 1)
    assert _ids(moved.schemes[0].tags) == ["00", "05", "01", "02", "03", "04"]


def test_tag62_operations(blank):
    config = editor.add_tag62(blank)
    config = editor.add_tag62(config, TLV(id="05", value="REF"))
    config = editor.update_tag62(config, 0, value="INV-1")
    assert [(tag.id, tag.value) for tag in config.additional_data_62] == [("01", "INV-1"), ("05", "REF")]

    config = editor.move_tag62(config, 1, 0)
    assert _ids(config.additional_data_62) == ["05", "01"]

    config = editor.remove_tag62(config, 0)
    assert _ids(config.additional_data_62) == ["01"]


@pytest.mark.parametrize(
    "operation",
    [
        lambda cfg: editor.remove_scheme(cfg, 3),
        lambda cfg: editor.move_scheme(cfg, 0, 2),
        lambda cfg: editor.update_scheme_tag(cfg, 0, 9, "x"),
        lambda cfg: editor.remove_tag62(cfg, 0),
        lambda cfg: editor.add_scheme_tag(cfg, -1),
    ],
)
def test_out_of_range_index(operation):
    with pytest.raises(ServiceError) as exc:
        operation(emvco_preset("paynow"))
    assert exc.value.code == "ERR_NOT_FOUND"


def test_operations_do_not_mutate_input():
    config = emvco_preset("paynow")
    before = config.model_copy(deep=True)
    editor.add_scheme_tag(config, 0)
    editor.update_scheme_tag(config, 0, 1, "UEN")
    editor.add_tag62(config)
    assert config == before
    assert isinstance(before, EmvcoConfig)
