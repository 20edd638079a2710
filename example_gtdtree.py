"""Demo script for the gtdtree package."""

from gtdtree import (
    ExecutionCounter,
    GtdTreeConfig,
    TreeRenderer,
    TreeSession,
    configure_gtdtree_logging,
    format_clock,
)


def build_session(config):
    """Build a small three-level plan through a session."""
    session = TreeSession(config=config)

    home = session.add_root("Move house")
    packing = session.add_child(home.id, "Pack")
    session.add_child(packing.id, "Kitchen")
    session.add_child(packing.id, "Books")
    van = session.insert_sibling_after(home.id, packing.id, "Book van")
    session.rename(van.id, "Book a van")

    work = session.insert_sibling_after(None, home.id, "Quarterly review")
    session.add_child(work.id, "")

    # Unknown ids are silent no-ops
    session.add_child("no-such-id", "Lost")
    return session


def main():
    """Run the demo."""
    config = GtdTreeConfig(enable_logging=True, log_level="DEBUG", logger_name="gtdtree.demo")
    configure_gtdtree_logging(level=config.log_level, logger_name=config.logger_name)
    session = build_session(config)
    renderer = TreeRenderer(config)

    print(renderer.render(session.tree))
    print()
    print(renderer.render_table(session.tree))
    print()
    print(renderer.render_map(session.tree))
    print()

    row = next(session.leaf_paths())
    counter = ExecutionCounter(renderer.format_title(row.task), target_minutes=25)
    for _ in range(90):
        counter.tick()
    counter.complete()
    print(f"{counter.title}: {format_clock(counter.total_seconds)}")


if __name__ == "__main__":
    print("=" * 60)
    print("gtdtree demo")
    print("=" * 60)
    print()
    main()
