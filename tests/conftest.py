"""Shared test fixtures for cpp-scratchpad.

Build tools are faked with plain shell commands so that neither Meson nor
CMake has to be installed. The fake tool "compiles" by copying a shell
script from the template to ``builddir/scratchpad``.
"""

from pathlib import Path

import pytest

from cpp_scratchpad.config import ScratchConfig
from cpp_scratchpad.scratchpad.manager import ScratchpadManager
from cpp_scratchpad.tools.registry import BuildTool

MAIN_CPP = """#include <iostream>

int main()
{
    $std::cout << "hi\\n";
    return 0;
}
"""

RUN_SH = "#!/bin/sh\necho hello from scratchpad\n"

FAKE_TOOL = BuildTool(
    name="sh",
    builddir_gen=(
        "mkdir -p builddir && echo configured > builddir/fake.sig"
        " && echo '[]' > builddir/compile_commands.json && echo configured builddir"
    ),
    compile="cp run.sh builddir/scratchpad && chmod +x builddir/scratchpad && echo compiled",
    signature="fake.sig",
)

FAILING_TOOL = BuildTool(
    name="sh",
    builddir_gen="mkdir -p builddir && touch builddir/fake.sig",
    compile="echo 'main.cpp:5:5: error: boom' && exit 2",
    signature="fake.sig",
)


def _found(name):
    return f"/usr/bin/{name}"


@pytest.fixture
def template(tmp_path) -> Path:
    tpl = tmp_path / "template"
    tpl.mkdir()
    (tpl / "main.cpp").write_text(MAIN_CPP)
    (tpl / "run.sh").write_text(RUN_SH)
    (tpl / "meson.build").write_text("project('scratchpad', 'cpp')\n")
    return tpl


@pytest.fixture
def scratch_root(tmp_path) -> Path:
    return tmp_path / "scratch"


def make_config(scratch_root, template, tools=(FAKE_TOOL,), which=_found):
    return ScratchConfig.build(
        scratch_root=scratch_root,
        template_dir=template,
        build_tools=tools,
        which=which,
    )


@pytest.fixture
def config(scratch_root, template) -> ScratchConfig:
    return make_config(scratch_root, template)


@pytest.fixture
def sent():
    """Commands received by output buffers in terminal mode."""
    return []


@pytest.fixture
def manager(config, sent) -> ScratchpadManager:
    def runner(command, cwd):
        sent.append((command, cwd))
        return 0

    return ScratchpadManager(config, runner=runner)
