"""
Locker Setup Tool

This tool helps you manage the free storage hours of each locker brand.
Parcels use these hours unless their notification states its own.

Usage: python setup_lockers.py
"""

import os
from pathlib import Path

from dotenv import load_dotenv

from locker_settings import (
    add_locker_setting, remove_locker_setting,
    sorted_locker_settings, suggest_locker_name
)
from parcel_store import ParcelStore


def show_lockers(store):
    """Print the configured lockers sorted by name."""

    settings = sorted_locker_settings(store.settings)
    print(f"Currently configured lockers: {len(settings)}")
    for i, (name, hours) in enumerate(settings, 1):
        print(f"  {i:2d}. {name}: {hours}小时免费")
    print()


def add_lockers(store):
    """Interactive tool to add or update locker settings."""

    print("\nEnter locker settings (press Enter with empty name to finish):")
    added = 0

    while True:
        name = input("Locker name: ").strip()
        if not name:
            break

        similar = suggest_locker_name(name, store.settings)
        if similar:
            print(f"⚠️  A similar locker is already configured: {similar}")

        hours = input("Free hours: ").strip()
        try:
            store.set_settings(add_locker_setting(store.settings, name, hours))
        except ValueError as e:
            print(f"❌ {e}")
            continue

        added += 1
        print(f"✓ Saved: {name} ({store.settings[name]}小时)")

    return added


def delete_locker(store):
    """Delete one locker setting after confirmation. Returns True if removed."""

    name = input("Locker name to delete: ").strip()
    if name not in store.settings:
        print(f"❌ Locker not configured: {name}")
        return False

    confirm = input(f'确定要删除快递柜"{name}"的设置吗？ (y/n): ').lower().strip()
    if confirm != 'y':
        print("Changes cancelled.")
        return False

    store.set_settings(remove_locker_setting(store.settings, name))
    print(f"✓ Deleted: {name}")
    return True


def show_unconfigured_lockers(store):
    """Show locker names found in parcels that have no free hours configured."""

    settings = store.settings
    unconfigured = sorted({
        record.locker_name for record in store.parcels
        if record.locker_name and record.locker_name not in settings
    })

    if not unconfigured:
        print("All lockers found in your parcels are configured.")
        return unconfigured

    print("\n📋 Lockers found in parcels without a setting:")
    print("-" * 60)
    for i, name in enumerate(unconfigured, 1):
        suggestion = suggest_locker_name(name, settings)
        hint = f"  (did you mean {suggestion}?)" if suggestion else ""
        print(f"  {i:2d}. {name}{hint}")

    print("\n💡 Tip: add these lockers so their parcels get the right free hours")
    return unconfigured


def main():
    """Main function."""

    print("📦 Locker Setup Tool")
    print("=" * 50)

    load_dotenv()
    state_path = Path(os.getenv('DATA_FOLDER', 'data')) / os.getenv('STATE_FILENAME', 'parcel_tracker.json')

    try:
        store = ParcelStore(state_path).load()
    except ValueError as e:
        print(f"❌ Error reading tracker state: {e}")
        return 1

    show_lockers(store)

    print("Choose an option:")
    print("1. Add or update lockers")
    print("2. Delete a locker")
    print("3. Show unconfigured lockers from saved parcels")

    choice = input("Enter choice (1-3): ").strip()

    changed = False
    if choice == '1':
        changed = add_lockers(store) > 0
    elif choice == '2':
        changed = delete_locker(store)
    elif choice == '3':
        show_unconfigured_lockers(store)
    else:
        print("No changes made.")

    if changed:
        store.save()
        print("✅ Locker settings saved!")
        show_lockers(store)

    return 0


if __name__ == "__main__":
    exit(main())
