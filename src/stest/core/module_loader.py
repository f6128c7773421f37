import ast
import importlib.abc
import importlib.util
import logging
import sys
from pathlib import Path
from types import CodeType, ModuleType

from stest.core.assert_transformer import AssertRewriteTransformer, build_injected_globals


logger = logging.getLogger(__name__)


class StestModuleLoader(importlib.abc.SourceLoader):
    """Source loader that compiles test modules with `assert` rewriting.

    ``path_stats`` is not implemented, so no bytecode is cached and an
    edited test file is always recompiled.
    """

    def __init__(self, fullname: str, path: Path) -> None:
        self.fullname = fullname
        self.path = path

    def get_filename(self, fullname: str) -> str:
        return str(self.path)

    def get_data(self, path: str) -> bytes:
        return Path(path).read_bytes()

    def source_to_code(self, data: bytes | str, path: str, *, _optimize: int = -1) -> CodeType:
        source = importlib.util.decode_source(data) if isinstance(data, bytes) else data
        tree = ast.parse(source, filename=path)
        tree = AssertRewriteTransformer(source, filename=path).visit(tree)
        return compile(ast.fix_missing_locations(tree), path, "exec", dont_inherit=True, optimize=_optimize)

    def exec_module(self, module: ModuleType) -> None:
        # Rewritten code calls the recorders through these names.
        module.__dict__.update(build_injected_globals())
        super().exec_module(module)


def load_test_module(path: str | Path, module_name: str | None = None) -> ModuleType:
    """Load a test module from ``path`` with its `assert` statements rewritten.

    The module is executed and returned; nothing inside it is collected.
    It is registered in ``sys.modules`` under ``module_name`` (default: the
    file stem) so that code inside it can import itself and pickle works.
    """
    path = Path(path).resolve()
    name = module_name or path.stem
    loader = StestModuleLoader(name, path)
    spec = importlib.util.spec_from_file_location(name, path, loader=loader)
    if spec is None:
        msg = f"Cannot load module from {path}"
        raise ImportError(msg)

    module = importlib.util.module_from_spec(spec)
    sys.modules[name] = module
    try:
        loader.exec_module(module)
    except BaseException:
        sys.modules.pop(name, None)
        raise
    logger.debug("Loaded test module %s from %s", name, path)
    return module
