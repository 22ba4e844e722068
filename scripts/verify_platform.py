import asyncio
import os
import sys
import importlib.util

# Add project root to sys.path
sys.path.append(os.getcwd())

def check_import(package_name):
    print(f"[Check] Import: {package_name} ... ", end="")
    if importlib.util.find_spec(package_name):
        print("OK")
        return True
    print("FAILED (pip install required)")
    return False

def check_binary(label, command):
    import shlex
    import shutil
    print(f"[Check] {label} CLI: {command} ... ", end="")
    argv = shlex.split(command)
    if argv and shutil.which(argv[0]):
        print("OK")
        return True
    print("NOT FOUND (agents cannot be spawned)")
    return False

async def check_config(adapter):
    from gsd_platform.core.errors import MalformedConfigError
    print(f"[Check] Config: {adapter.get_config_path()} ... ", end="")
    try:
        config = await adapter.read_config()
    except MalformedConfigError as e:
        print(f"MALFORMED\n  Error: {e.message}")
        return False
    print(f"OK ({len(config)} top-level keys)" if config else "OK (not created yet)")
    return True

async def main():
    print("=== GSD Platform Verification ===\n")

    # 1. Check Dependencies
    pkgs = ["pydantic", "pydantic_settings", "aiofiles", "json5"]
    if not all(check_import(p) for p in pkgs):
        print("\n[FATAL] Missing dependencies. Run: pip install -e .")
        return

    # 2. Detect Platform
    from gsd_platform.core.config import get_settings
    from gsd_platform.core.errors import PlatformDetectionError
    from gsd_platform.core.logging import setup_logging
    from gsd_platform.kernel.registry import default_registry

    settings = get_settings()
    setup_logging(settings.LOG_LEVEL)
    try:
        adapter = default_registry.get_adapter()
    except PlatformDetectionError as e:
        print(f"\n[FATAL] {e.message}")
        return
    print(f"[Info] Platform: {adapter.name.value} (adapter {adapter.version})")

    # 3. Paths & Capabilities
    paths = adapter.path_set()
    print(f"[Info] Config dir:   {paths.config_dir}")
    print(f"[Info] Commands dir: {paths.commands_dir}")
    print(f"[Info] Agents dir:   {paths.agents_dir}")
    print(f"[Info] Hooks dir:    {paths.hooks_dir}")
    for name, supported in adapter.capabilities().items():
        print(f"[Info] Supports {name}: {'yes' if supported else 'no'}")

    # 4. Environment Checks
    config_ok = await check_config(adapter)
    binary = settings.CLAUDE_BIN if adapter.name.value == "claude-code" else settings.OPENCODE_BIN
    binary_ok = check_binary(adapter.name.value, binary)

    print("\n=== Summary ===")
    if config_ok and binary_ok:
        print("All checks passed.")
    else:
        print("Some checks failed. See above.")

if __name__ == "__main__":
    asyncio.run(main())
