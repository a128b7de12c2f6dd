# scraper/sources/targets.py

from typing import Iterable, List

from scraper.interfaces.models import Target

CLUBS = (
    Target("Luleå HF", "https://clubs.clubmate.se/luleahockey/"),
    Target("Brynäs IF", "https://clubs.clubmate.se/brynas/"),
    Target("Djurgårdens IF", "https://clubs.clubmate.se/difhockey/"),
    Target("Färjestad BK", "https://clubs.clubmate.se/farjestadbk/"),
    Target("Frölunda HC", "https://clubs.clubmate.se/frolundahockey/"),
    Target("HV 71", "https://clubs.clubmate.se/hv71/"),
    Target("Leksands IF", "https://clubs.clubmate.se/leksandsif/"),
    Target("Linköping HC", "https://clubs.clubmate.se/lhc/"),
    Target("IF Malmö Redhawks", "https://clubs.clubmate.se/malmoredhawks/"),
    Target("Örebro HK", "https://clubs.clubmate.se/orebrohockey/"),
    Target("Rögle BK", "https://clubs.clubmate.se/roglebk/"),  # has a hard selector
    Target("Skellefteå AIK", "https://clubs.clubmate.se/skellefteaaik/"),
    Target("Timrå IK", "https://clubs.clubmate.se/timraik/"),
    Target("Växjö Lakers HC", "https://clubs.clubmate.se/vaxjolakers/"),
)


def targets_by_name(names: Iterable[str], targets=CLUBS) -> List[Target]:
    """
    Restrict a run to the given club names (case-insensitive), keeping the
    order of `targets`. Unknown names raise ValueError.
    """
    wanted = {n.strip().lower() for n in names if n.strip()}
    known = {t.name.lower() for t in targets}
    unknown = wanted - known
    if unknown:
        raise ValueError(f"Unknown targets: {', '.join(sorted(unknown))}")
    return [t for t in targets if t.name.lower() in wanted]
