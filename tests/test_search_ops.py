import pytest

from promptline.tools.base import ExecutionFailedError, InvalidArgsError, ToolContext
from promptline.tools.search_ops import CodebaseSearchTool


@pytest.mark.asyncio
async def test_codebase_search_success(tmp_path):
    (tmp_path / "file1.txt").write_text("hello world")
    (tmp_path / "file2.rs").write_text('fn main() {\n    println!("hello");\n}')

    result = await CodebaseSearchTool().execute(
        {"pattern": "hello"}, ToolContext(working_dir=tmp_path)
    )
    assert result.success
    assert "file1.txt" in result.output
    assert "file2.rs" in result.output


@pytest.mark.asyncio
async def test_codebase_search_reports_line_numbers(tmp_path):
    (tmp_path / "notes.txt").write_text("alpha\nbeta\ngamma\n")

    result = await CodebaseSearchTool().execute(
        {"pattern": "gamma"}, ToolContext(working_dir=tmp_path)
    )
    assert ":3:gamma" in result.output


@pytest.mark.asyncio
async def test_codebase_search_no_match(tmp_path):
    (tmp_path / "file1.txt").write_text("foo bar")

    result = await CodebaseSearchTool().execute(
        {"pattern": "nonexistent"}, ToolContext(working_dir=tmp_path)
    )
    assert result.success
    assert result.output == ""


@pytest.mark.asyncio
async def test_codebase_search_invalid_pattern(tmp_path):
    with pytest.raises(ExecutionFailedError, match="Codebase search failed"):
        await CodebaseSearchTool().execute({"pattern": "["}, ToolContext(working_dir=tmp_path))


@pytest.mark.asyncio
async def test_codebase_search_limited_to_path(tmp_path):
    inner = tmp_path / "inner"
    inner.mkdir()
    (inner / "inside.txt").write_text("needle")
    (tmp_path / "outside.txt").write_text("needle")

    result = await CodebaseSearchTool().execute(
        {"pattern": "needle", "path": str(inner)}, ToolContext(working_dir=tmp_path)
    )
    assert "inside.txt" in result.output
    assert "outside.txt" not in result.output


@pytest.mark.asyncio
async def test_codebase_search_missing_pattern(tmp_path):
    with pytest.raises(InvalidArgsError, match="Missing search pattern"):
        await CodebaseSearchTool().execute({}, ToolContext(working_dir=tmp_path))


def test_pattern_is_required():
    assert CodebaseSearchTool().to_definition()["parameters"]["required"] == ["pattern"]