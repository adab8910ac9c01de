"""``beatstv-tools movie`` — look up TMDB metadata for a channel title."""

from __future__ import annotations

from rich.table import Table

from beatstv_tools.cli import exit_codes
from beatstv_tools.cli.console import console
from beatstv_tools.core.images import IMG_POSTER_LARGE, get_image_url
from beatstv_tools.core.metadata_service import MetadataService
from beatstv_tools.core.models import MovieDetails
from beatstv_tools.core.movie_cache import select_trailer
from beatstv_tools.core.titles import clean_title, extract_year, strip_year

TOP_CAST_SHOWN = 5


def _trailer_url(details: MovieDetails) -> str | None:
    trailer = select_trailer(details.videos)
    if trailer is None or trailer.site != "YouTube":
        return None
    return f"https://www.youtube.com/watch?v={trailer.key}"


def _build_summary(details: MovieDetails) -> Table:
    table = Table(title=details.title, show_header=False, border_style="dim")
    table.add_column("Field", style="bold cyan")
    table.add_column("Value")

    rows: list[tuple[str, str | None]] = [
        ("Tagline", details.tagline),
        ("Released", details.release_date),
        ("Runtime", f"{details.runtime} min" if details.runtime else None),
        (
            "Rating",
            f"{details.vote_average:.1f} ({details.vote_count or 0} votes)"
            if details.vote_average is not None else None,
        ),
        ("Genres", ", ".join(g.name for g in details.genres) if details.genres else None),
        ("Director", details.director),
        (
            "Cast",
            ", ".join(m.name for m in details.credits.cast[:TOP_CAST_SHOWN])
            if details.credits and details.credits.cast else None,
        ),
        ("Trailer", _trailer_url(details)),
        ("Poster", get_image_url(details.poster_path, IMG_POSTER_LARGE)),
    ]
    for label, value in rows:
        if value:
            table.add_row(label, value)
    return table


def run_movie_lookup(raw_title: str, service: MetadataService) -> int:
    """Normalise *raw_title*, look it up and print a summary."""
    year = extract_year(raw_title)
    query = strip_year(clean_title(raw_title))

    console.print(f"\n[bold]Looking up[/bold] {query}" + (f" ({year})" if year else ""))
    details = service.search_and_get_details(query, year)
    if details is None:
        console.print("[yellow]No matching movie found.[/yellow]")
        return exit_codes.GENERAL_ERROR

    console.print()
    console.print(_build_summary(details))
    if details.overview:
        console.print(f"\n{details.overview}\n", markup=False, highlight=False)
    return exit_codes.SUCCESS
