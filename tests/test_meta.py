"""Tests for notebook/block records and their persisted form."""

from blockflow.notebook.meta import (
    BlockMeta,
    BlockType,
    NotebookMeta,
    generate_block_id,
    generate_notebook_id,
)


def test_generate_ids() -> None:
    assert generate_notebook_id().startswith("nb_")
    assert len(generate_notebook_id()) == 15
    assert generate_block_id().startswith("blk_")
    assert len(generate_block_id()) == 12
    assert len({generate_block_id() for _ in range(100)}) == 100


def test_block_type_labels() -> None:
    assert BlockType.all() == [BlockType.UNKNOWN, BlockType.FUNCTION]
    assert BlockType.UNKNOWN.label == "Unknown"
    assert BlockType.FUNCTION.label == "Function"
    assert BlockType(1) is BlockType.FUNCTION


def test_block_defaults() -> None:
    meta = BlockMeta()
    assert meta.type == BlockType.UNKNOWN
    assert meta.function_key is None
    assert meta.auto_exec is False
    assert meta.expand_settings is False
    assert meta.expand_output is False


def test_record_omits_defaults() -> None:
    meta = NotebookMeta(id="nb_1", blocks=[BlockMeta(id="blk_1")])
    assert meta.to_record() == {"id": "nb_1", "blocks": [{"id": "blk_1", "type": 0}]}


def test_record_uses_camel_case_keys() -> None:
    meta = NotebookMeta(
        id="nb_1",
        name="Pipeline",
        is_deleted=True,
        blocks=[
            BlockMeta(
                id="blk_1",
                type=BlockType.FUNCTION,
                function_key="identity",
                auto_exec=True,
                expand_settings=True,
                expand_output=True,
            )
        ],
    )
    assert meta.to_record() == {
        "id": "nb_1",
        "name": "Pipeline",
        "isDeleted": True,
        "blocks": [
            {
                "id": "blk_1",
                "type": 1,
                "functionKey": "identity",
                "autoExec": True,
                "expandSettings": True,
                "expandOutput": True,
            }
        ],
    }


def test_from_record_restores_defaults() -> None:
    meta = NotebookMeta.from_record({"id": "nb_1", "blocks": [{"id": "blk_1", "type": 1, "functionKey": "f"}]})
    assert meta.name is None
    assert meta.is_deleted is False
    block = meta.blocks[0]
    assert block.type is BlockType.FUNCTION
    assert block.function_key == "f"
    assert block.expand_output is False


def test_from_record_accepts_field_names() -> None:
    meta = NotebookMeta.from_record({"id": "nb_1", "is_deleted": True, "blocks": []})
    assert meta.is_deleted is True
