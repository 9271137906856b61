import click
import yaml
from pathlib import Path

from xcforge_engine.build_step import BuildStepType
from xcforge_engine.classifier import DETAIL_STEP_PREFIXES, get_detail_type
from xcforge_engine.flattener import flatten
from xcforge_engine.logger_setup import logger, set_log_level
from xcforge_engine.settings import load_settings
from xcforge_engine.step_report import dump_steps, load_tree, steps_to_json
from xcforge_engine.tree_passes import apply_classification, count_by_category, roll_up_counts


def _load_tree_or_exit(ctx: click.Context, tree_file: Path):
    try:
        return load_tree(tree_file)
    except ValueError as e:
        logger.error(f"Could not read build tree {tree_file}: {e}")
        click.echo(f"Error: {e}")
        ctx.exit(1)


@click.group()
@click.option("--config", "config_path", type=click.Path(dir_okay=False, path_type=Path), default=None,
              help="Settings file (defaults to $XCFORGE_CONFIG or ./xcforge.yaml).")
@click.pass_context
def cli(ctx: click.Context, config_path):
    """xcforge: classify and flatten Xcode build step trees."""
    try:
        settings = load_settings(config_path)
        set_log_level(settings.log_level)
    except ValueError as e:
        click.echo(f"Error: {e}")
        ctx.exit(1)
    ctx.obj = settings

@cli.command("config")
@click.pass_context
def show_config(ctx: click.Context):
    """Prints the settings in effect, after file and environment overrides."""
    click.echo(yaml.safe_dump({"xcforge": ctx.obj.to_dict()}, sort_keys=False), nl=False)

@cli.command("classify")
@click.argument("signature")
def classify(signature: str):
    """Prints the detail category of a step signature."""
    click.echo(get_detail_type(signature).value)

@cli.command("categories")
def categories():
    """Lists the signature prefixes in the order they are matched."""
    click.echo(f"{'Prefix':<34} {'Category'}")
    click.echo("-" * 64)
    for prefix, detail_type in DETAIL_STEP_PREFIXES:
        click.echo(f"{repr(prefix):<34} {detail_type.value}")

@cli.command("flatten")
@click.argument("tree_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--output", "-o", type=click.Path(dir_okay=False, path_type=Path), default=None,
              help="Write the flattened steps to this file instead of stdout.")
@click.option("--classify/--no-classify", "do_classify", default=None, help="Classify detail steps before flattening.")
@click.option("--rollup/--no-rollup", "do_rollup", default=None, help="Roll up warning and error counts before flattening.")
@click.pass_context
def flatten_cmd(ctx: click.Context, tree_file: Path, output, do_classify, do_rollup):
    """Flattens a build step tree read from a JSON file."""
    settings = ctx.obj
    root = _load_tree_or_exit(ctx, tree_file)

    if do_classify is None:
        do_classify = settings.classify_on_load
    if do_rollup is None:
        do_rollup = settings.rollup_on_load

    if do_classify:
        apply_classification(root)
    if do_rollup:
        roll_up_counts(root)

    steps = flatten(root)
    if output:
        dump_steps(output, steps, indent=settings.json_indent)
        click.echo(f"Wrote {len(steps)} steps to {output}")
    else:
        click.echo(steps_to_json(steps, indent=settings.json_indent))

@cli.command("summary")
@click.argument("tree_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.pass_context
def summary(ctx: click.Context, tree_file: Path):
    """Shows duration, warnings and errors per target and detail steps per category."""
    root = roll_up_counts(apply_classification(_load_tree_or_exit(ctx, tree_file)))

    click.echo(f"Build {root.build_identifier or root.identifier} | Schema: {root.schema or 'N/A'} | Status: {root.build_status or 'N/A'}")
    click.echo(f"  Duration: {root.duration}s | Warnings: {root.warning_count} | Errors: {root.error_count}")
    targets = [s for s in root.sub_steps if s.step_kind is BuildStepType.TARGET]
    if targets:
        click.echo("Targets:")
        for target in targets:
            click.echo(f"  - {target.title or target.identifier} | Duration: {target.duration}s | Warnings: {target.warning_count} | Errors: {target.error_count}")
    category_counts = count_by_category(root)
    if category_counts:
        click.echo("Detail steps:")
        for detail_type, count in category_counts.most_common():
            click.echo(f"  {detail_type.value:<30} {count}")

if __name__ == '__main__':
    cli()
