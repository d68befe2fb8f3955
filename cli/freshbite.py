# cli/freshbite.py
# Command-line front end for the FreshBite food inventory.
# - Product categorization and storage suggestions (classify, suggest)
# - Learned category overrides (learn, forget, learned)
# - Inventory items with expiry tracking (items ...)
# - Shopping list (shopping ...)
# - Dashboard summary, body profile and nutrition plan (dashboard, profile ..., plan)
#
# Examples:
#   freshbite classify "chicken curry"
#   freshbite suggest "frozen peas" --json
#   freshbite learn aloo "Vegetables & Fruits"
#   freshbite items add "paneer 200g" --expires 2025-01-31
#   freshbite items list --sort expiry --expiring
#   freshbite --store json --db data/fb.json shopping list
#   freshbite profile set --weight 70 --height 175 --age 30 --activity moderate
#   freshbite plan --diet protein_rich --json

from __future__ import annotations

import json
import logging
from dataclasses import asdict
from datetime import date
from pathlib import Path
from typing import Optional

import click

from categorizer.rules import normalize_name
from categorizer.service import CategorizerService, UnknownCategoryError
from categorizer.tables import load_tables
from config.loader import load_config
from fb_core.models import FoodItem, ShoppingListItem, UserPreferences, generate_id
from fb_utils.dashboard import summarize
from fb_utils.expiry import (
    calculate_days_remaining,
    format_expiry_message,
    get_expiry_status,
)
from fb_utils.inventory import SORT_KEYS, filter_items, sort_items
from fb_utils.logging_setup import setup_logging
from fb_utils.nutrition import (
    ACTIVITY_MULTIPLIERS,
    GOALS,
    MACRO_RATIOS,
    build_nutrition_plan,
    calculate_bmi,
    calculate_bmr,
    check_profile,
    get_bmi_category,
)
from storage import FoodRepository, make_store

LOGGER = logging.getLogger("freshbite")


class AppContext:
    """Objects shared by every command, built once per invocation."""

    def __init__(self, cfg: dict, backend: str, db_path: str, output_json: bool):
        self.cfg = cfg
        self.output_json = output_json
        self.store = make_store(backend, db_path)
        tables_path = cfg["categorizer"].get("tables") or None
        self.categorizer = CategorizerService(self.store, load_tables(tables_path))
        self.repo = FoodRepository(self.store)

    def close(self) -> None:
        close = getattr(self.store, "close", None)
        if close:
            close()


def _emit(ctx: AppContext, payload: dict, human: str) -> None:
    if ctx.output_json:
        click.echo(json.dumps(payload, ensure_ascii=False))
    else:
        click.echo(human)


# ----------------------------- CLI -----------------------------
@click.group()
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False),
    default=None,
    help="Path to config.toml (default: repo root config.toml if present).",
)
@click.option(
    "--store",
    "backend",
    type=click.Choice(["memory", "json", "sqlite"]),
    default=None,
    help="Storage backend (default from config).",
)
@click.option("--db", "db_path", default=None, help="Path to the store file.")
@click.option("--json", "output_json", is_flag=True, help="Output results as JSON.")
@click.option("--quiet", is_flag=True, help="Only warnings and errors.")
@click.option("--verbose", is_flag=True, help="Verbose logging.")
@click.pass_context
def cli(
    ctx: click.Context,
    config_path: Optional[str],
    backend: Optional[str],
    db_path: Optional[str],
    output_json: bool,
    quiet: bool,
    verbose: bool,
) -> None:
    """FreshBite food inventory CLI."""
    try:
        cfg = load_config(Path(config_path) if config_path else None)
    except FileNotFoundError as e:
        raise click.UsageError(str(e))

    level = cfg["logging"]["level"]
    if quiet:
        level = "WARNING"
    if verbose:
        level = "DEBUG"
    setup_logging(level)

    app = AppContext(
        cfg,
        backend or cfg["store"]["backend"],
        db_path or cfg["store"]["path"],
        output_json,
    )
    ctx.obj = app
    ctx.call_on_close(app.close)


# ----------------------------- Categorization -----------------------------
@cli.command("classify")
@click.argument("name")
@click.pass_obj
def classify_cmd(app: AppContext, name: str) -> None:
    """Detect the category of a product name."""
    res = app.categorizer.classify(name)
    matched = f", matched: {res.matched_keyword}" if res.matched_keyword else ""
    _emit(
        app,
        {"name": name, **asdict(res)},
        f"[{res.category}] {name} ({res.confidence}{matched})",
    )


@cli.command("suggest")
@click.argument("name")
@click.pass_obj
def suggest_cmd(app: AppContext, name: str) -> None:
    """Suggest category and storage location for a product name."""
    s = app.categorizer.suggest(name)
    placeholder = app.categorizer.quantity_placeholder(s.category)
    payload = {"name": name, **asdict(s), "quantity_placeholder": placeholder}
    human = "\n".join(
        [
            f"Product    : {name}",
            f"Category   : {s.category} ({s.confidence})",
            f"Storage    : {s.storage} - {s.reason}",
            f"Quantity   : {placeholder}",
        ]
    )
    _emit(app, payload, human)


@cli.command("learn")
@click.argument("name")
@click.argument("category")
@click.pass_obj
def learn_cmd(app: AppContext, name: str, category: str) -> None:
    """Remember CATEGORY for product NAME, overriding keyword detection."""
    try:
        app.categorizer.learn(name, category)
    except UnknownCategoryError as e:
        click.echo(f"[error] {e}", err=True)
        raise SystemExit(1)
    _emit(
        app,
        {"name": normalize_name(name), "category": category},
        f"[ok] {normalize_name(name)} -> {category}",
    )


@cli.command("forget")
@click.argument("name")
@click.pass_obj
def forget_cmd(app: AppContext, name: str) -> None:
    """Drop a learned category for NAME."""
    removed = app.categorizer.forget(name)
    _emit(
        app,
        {"name": name, "removed": removed},
        f"[ok] forgot {name}" if removed else f"[skip] nothing learned for {name}",
    )


@cli.command("learned")
@click.pass_obj
def learned_cmd(app: AppContext) -> None:
    """List learned category overrides."""
    mappings = app.categorizer.preferences.mappings()
    if app.output_json:
        click.echo(json.dumps(mappings, ensure_ascii=False))
        return
    if not mappings:
        click.echo("[info] no learned categories.")
        return
    for name, category in sorted(mappings.items()):
        click.echo(f"  {name} -> {category}")


# ----------------------------- Inventory -----------------------------
@cli.group("items")
def items_grp() -> None:
    """Inventory items."""


@items_grp.command("add")
@click.argument("name")
@click.option("--expires", "expiry", required=True, help="Expiry date (YYYY-MM-DD).")
@click.option("--quantity", default="", help="Free-text quantity, e.g. '500g'.")
@click.option("--category", default=None, help="Category (auto-detected if omitted).")
@click.option(
    "--storage",
    type=click.Choice(["Fridge", "Freezer", "Pantry", "Cupboard"]),
    default=None,
    help="Storage location (suggested if omitted).",
)
@click.option("--notes", default=None)
@click.pass_obj
def items_add_cmd(
    app: AppContext,
    name: str,
    expiry: str,
    quantity: str,
    category: Optional[str],
    storage: Optional[str],
    notes: Optional[str],
) -> None:
    """Add an item; category and storage are suggested when not given."""
    try:
        date.fromisoformat(expiry)
    except ValueError:
        raise click.BadParameter(f"not an ISO date: {expiry}", param_hint="--expires")

    detected = app.categorizer.classify(name)
    if category and category != detected.category:
        # User overrode the detected category; remember it for next time
        LOGGER.info("Override for %r: %s -> %s", name, detected.category, category)
        try:
            app.categorizer.learn(name, category)
        except UnknownCategoryError as e:
            raise click.BadParameter(str(e), param_hint="--category")
    category = category or detected.category
    storage = storage or app.categorizer.suggest_storage(category, name).storage

    item = FoodItem(
        id=generate_id(),
        name=name,
        category=category,
        quantity=quantity,
        expiry_date=expiry,
        storage=storage,
        date_added=date.today().isoformat(),
        notes=notes,
    )
    app.repo.add_item(item)
    _emit(
        app,
        item.to_dict(),
        f"[ok] {item.id} {item.name} [{item.category}] -> {item.storage}",
    )


@items_grp.command("list")
@click.option("--sort", "sort_by", type=click.Choice(SORT_KEYS), default="expiry", show_default=True)
@click.option("--category", default=None)
@click.option("--storage", default=None)
@click.option("--search", default=None)
@click.option("--expiring", is_flag=True, help="Only critical/warning items.")
@click.pass_obj
def items_list_cmd(
    app: AppContext,
    sort_by: str,
    category: Optional[str],
    storage: Optional[str],
    search: Optional[str],
    expiring: bool,
) -> None:
    """List inventory items."""
    thresholds = app.cfg["expiry"]
    items = filter_items(
        app.repo.get_items(),
        search=search,
        category=category,
        storage=storage,
        expiry="expiring" if expiring else None,
        critical_days=thresholds["critical_days"],
        warning_days=thresholds["warning_days"],
    )
    items = sort_items(items, sort_by)

    rows = []
    for item in items:
        days = calculate_days_remaining(item.expiry_date)
        status = get_expiry_status(
            item.expiry_date,
            critical_days=thresholds["critical_days"],
            warning_days=thresholds["warning_days"],
        )
        rows.append((item, days, status))

    if app.output_json:
        click.echo(
            json.dumps(
                [
                    {**item.to_dict(), "daysRemaining": days, "status": status}
                    for item, days, status in rows
                ],
                ensure_ascii=False,
            )
        )
        return
    if not rows:
        click.echo("[info] no items.")
        return
    for item, days, status in rows:
        click.echo(
            f"  {item.id}  {item.name:<24} {item.category:<20} {item.storage:<9}"
            f" {format_expiry_message(days)} [{status}]"
        )


@items_grp.command("remove")
@click.argument("item_id")
@click.pass_obj
def items_remove_cmd(app: AppContext, item_id: str) -> None:
    """Delete an item."""
    if not app.repo.delete_item(item_id):
        click.echo(f"[error] no item with id {item_id}", err=True)
        raise SystemExit(1)
    _emit(app, {"id": item_id, "removed": True}, f"[ok] removed {item_id}")


@items_grp.command("consume")
@click.argument("item_id")
@click.option("--no-restock", is_flag=True, help="Do not add to the shopping list.")
@click.pass_obj
def items_consume_cmd(app: AppContext, item_id: str, no_restock: bool) -> None:
    """Mark an item consumed (and queue it on the shopping list)."""
    consumed = app.repo.mark_consumed(item_id, restock=not no_restock)
    if consumed is None:
        click.echo(f"[error] no item with id {item_id}", err=True)
        raise SystemExit(1)
    _emit(app, consumed.to_dict(), f"[ok] consumed {consumed.item_name}")


# ----------------------------- Shopping list -----------------------------
@cli.group("shopping")
def shopping_grp() -> None:
    """Shopping list."""


@shopping_grp.command("add")
@click.argument("name")
@click.option("--quantity", default="")
@click.pass_obj
def shopping_add_cmd(app: AppContext, name: str, quantity: str) -> None:
    """Add an entry; its category is detected from the name."""
    entry = ShoppingListItem(
        id=generate_id(),
        name=name,
        category=app.categorizer.classify(name).category,
        quantity=quantity,
    )
    app.repo.add_to_shopping_list(entry)
    _emit(app, entry.to_dict(), f"[ok] {entry.id} {entry.name} [{entry.category}]")


@shopping_grp.command("list")
@click.pass_obj
def shopping_list_cmd(app: AppContext) -> None:
    """Show the shopping list."""
    entries = app.repo.get_shopping_list()
    if app.output_json:
        click.echo(json.dumps([e.to_dict() for e in entries], ensure_ascii=False))
        return
    if not entries:
        click.echo("[info] shopping list is empty.")
        return
    for e in entries:
        mark = "x" if e.is_completed else " "
        qty = f" ({e.quantity})" if e.quantity else ""
        click.echo(f"  [{mark}] {e.id}  {e.name}{qty} [{e.category}]")


@shopping_grp.command("done")
@click.argument("item_id")
@click.option("--undo", is_flag=True, help="Mark as not completed.")
@click.pass_obj
def shopping_done_cmd(app: AppContext, item_id: str, undo: bool) -> None:
    """Toggle the completed flag of an entry."""
    if not app.repo.update_shopping_item(item_id, is_completed=not undo):
        click.echo(f"[error] no shopping entry with id {item_id}", err=True)
        raise SystemExit(1)
    _emit(
        app,
        {"id": item_id, "isCompleted": not undo},
        f"[ok] {item_id} {'open' if undo else 'done'}",
    )


@shopping_grp.command("clear")
@click.pass_obj
def shopping_clear_cmd(app: AppContext) -> None:
    """Remove completed entries."""
    removed = app.repo.clear_completed_shopping_items()
    noun = "entry" if removed == 1 else "entries"
    _emit(app, {"removed": removed}, f"[ok] cleared {removed} completed {noun}")


# ----------------------------- Dashboard -----------------------------
@cli.command("dashboard")
@click.pass_obj
def dashboard_cmd(app: AppContext) -> None:
    """Inventory totals, expiry counts and what to use up first."""
    thresholds = app.cfg["expiry"]
    s = summarize(
        app.repo.get_items(),
        app.repo.get_consumed_items(),
        critical_days=thresholds["critical_days"],
        warning_days=thresholds["warning_days"],
    )
    payload = {
        "totalItems": s.total_items,
        "expiringCritical": s.expiring_critical,
        "expiringWarning": s.expiring_warning,
        "expired": s.expired,
        "consumedThisWeek": s.consumed_this_week,
        "expiringSoon": [i.to_dict() for i in s.expiring_soon],
    }
    lines = [
        f"Total items        : {s.total_items}",
        f"Expiring in {thresholds['critical_days']} days : {s.expiring_critical}",
        f"Expiring in {thresholds['warning_days']} days : {s.expiring_warning}",
        f"Expired            : {s.expired}",
        f"Consumed this week : {s.consumed_this_week}",
    ]
    if s.expiring_soon:
        lines.append("Use soon:")
        for item in s.expiring_soon:
            days = calculate_days_remaining(item.expiry_date)
            lines.append(f"  {item.name:<24} {format_expiry_message(days)}")
    _emit(app, payload, "\n".join(lines))


# ----------------------------- Profile & nutrition -----------------------------
@cli.group("profile")
def profile_grp() -> None:
    """Body profile used for nutrition targets."""


@profile_grp.command("set")
@click.option("--weight", type=float, default=None, help="Weight in kg.")
@click.option("--height", type=float, default=None, help="Height in cm.")
@click.option("--age", type=int, default=None)
@click.option("--gender", type=click.Choice(["male", "female"]), default=None)
@click.option("--activity", type=click.Choice(list(ACTIVITY_MULTIPLIERS)), default=None)
@click.option("--goal", type=click.Choice(GOALS), default=None)
@click.option("--diet", type=click.Choice(list(MACRO_RATIOS)), default=None)
@click.pass_obj
def profile_set_cmd(
    app: AppContext,
    weight: Optional[float],
    height: Optional[float],
    age: Optional[int],
    gender: Optional[str],
    activity: Optional[str],
    goal: Optional[str],
    diet: Optional[str],
) -> None:
    """Save the profile; options not given keep their stored values."""
    prefs = app.repo.get_preferences() or UserPreferences(weight=0, height=0, age=0)
    updates = {
        "weight": weight,
        "height": height,
        "age": age,
        "gender": gender,
        "activity_level": activity,
        "goal": goal,
        "preferred_diet": diet,
    }
    for field_name, value in updates.items():
        if value is not None:
            setattr(prefs, field_name, value)
    try:
        check_profile(prefs)
    except ValueError as e:
        click.echo(f"[error] {e}", err=True)
        raise SystemExit(1)
    app.repo.set_preferences(prefs)
    _emit(
        app,
        prefs.to_dict(),
        f"[ok] profile saved ({prefs.weight:g} kg, {prefs.height:g} cm, age {prefs.age})",
    )


@profile_grp.command("show")
@click.pass_obj
def profile_show_cmd(app: AppContext) -> None:
    """Show the stored profile with BMI and BMR."""
    prefs = app.repo.get_preferences()
    if prefs is None:
        if app.output_json:
            click.echo("null")
        else:
            click.echo("[info] no profile saved.")
        return

    payload = prefs.to_dict()
    lines = [
        f"Weight   : {prefs.weight:g} kg",
        f"Height   : {prefs.height:g} cm",
        f"Age      : {prefs.age}",
        f"Gender   : {prefs.gender}",
        f"Activity : {prefs.activity_level}",
        f"Goal     : {prefs.goal}",
        f"Diet     : {prefs.preferred_diet}",
    ]
    try:
        check_profile(prefs)
    except ValueError as e:
        LOGGER.warning("Stored profile incomplete: %s", e)
    else:
        bmi = calculate_bmi(prefs.weight, prefs.height)
        bmr = calculate_bmr(prefs.weight, prefs.height, prefs.age, prefs.gender)
        payload.update({"bmi": bmi, "bmiCategory": get_bmi_category(bmi), "bmr": bmr})
        lines.append(f"BMI      : {bmi:.1f} ({get_bmi_category(bmi)})")
        lines.append(f"BMR      : {round(bmr)} kcal")
    _emit(app, payload, "\n".join(lines))


@cli.command("plan")
@click.option(
    "--diet",
    type=click.Choice(list(MACRO_RATIOS)),
    default=None,
    help="Diet type (default: the profile's preferred diet). Saved to the profile.",
)
@click.pass_obj
def plan_cmd(app: AppContext, diet: Optional[str]) -> None:
    """Daily calorie and macro targets from the stored profile."""
    prefs = app.repo.get_preferences()
    if prefs is None:
        click.echo("[error] no profile saved; run 'freshbite profile set' first", err=True)
        raise SystemExit(1)
    try:
        plan = build_nutrition_plan(prefs, diet)
    except ValueError as e:
        click.echo(f"[error] {e}", err=True)
        raise SystemExit(1)

    if diet and diet != prefs.preferred_diet:
        prefs.preferred_diet = diet
        app.repo.set_preferences(prefs)

    m = plan.macros
    human = "\n".join(
        [
            f"BMI      : {plan.bmi:.1f} ({plan.bmi_category})",
            f"BMR      : {round(plan.bmr)} kcal",
            f"TDEE     : {round(plan.tdee)} kcal",
            f"Target   : {plan.target_calories} kcal ({prefs.goal})",
            f"Macros   : protein {m['protein']} g, carbs {m['carbs']} g,"
            f" fats {m['fats']} g ({plan.diet_type})",
        ]
    )
    _emit(app, asdict(plan), human)


if __name__ == "__main__":
    cli()
