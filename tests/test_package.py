import importlib

import wrapcore


def test_package_init_only_documents_components():
    assert "drone_manager.py" in wrapcore.__doc__
    assert not hasattr(wrapcore, "__all__")
    public = [name for name in vars(wrapcore) if not name.startswith("_")]
    # Submodules appear only once something imports them
    assert all(importlib.import_module(f"wrapcore.{name}") for name in public)
