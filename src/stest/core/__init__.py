from .assert_transformer import AssertRewriteTransformer, build_injected_globals
from .module_loader import StestModuleLoader, load_test_module

__all__ = [
    "build_injected_globals",
    "AssertRewriteTransformer",
    "StestModuleLoader",
    "load_test_module",
]
