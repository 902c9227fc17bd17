# Vulture whitelist for pytest fixtures and framework entry points
# These names are used by pytest/asyncio/setuptools but not explicitly referenced in code

# Console script entry point (registered in lib/setup.py)
main

# Async protocol methods (invoked by `async with` / `async for`)
__aenter__
__aexit__
__aiter__
__anext__

# Public adapter surface used by front-ends, not by the CLI
subscribe
unsubscribe
revoke
fail_next_write

# Pytest fixtures (injected by pytest, not direct calls)
upstream  # tests/unit/python/test_cli.py
nfc_modules  # tests/unit/python/test_nfcpy_device.py

# Fixtures from tests/conftest.py
pytest_configure  # pytest hook
