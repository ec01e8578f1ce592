"""
Static reference tables for the RailData API.

Plain data: stations, lines and their lookup aliases, plus the small code
tables used when normalizing schedule payloads.
"""

from __future__ import annotations

from raildata.models import (
    Color,
    Line,
    SpecialTrack,
    Station,
    StationPosition,
    StopCode,
    TrainIdPrefix,
)

TRAIN_ID_PREFIXES: tuple[TrainIdPrefix, ...] = (
    TrainIdPrefix(prefix="A", description="Amtrak Train"),
    TrainIdPrefix(prefix="S", description="Septa Train"),
    TrainIdPrefix(prefix="X", description="Non-Revenue train - Does not accept passengers"),
)

# Track ids the API reports that are signed differently at the station
SPECIAL_TRACKS: tuple[SpecialTrack, ...] = (
    SpecialTrack(id="Single", station_code="ON", translation="1"),
    SpecialTrack(id="2", station_code="MP", translation="1"),
    SpecialTrack(id="B", station_code="UV", translation="2"),
    SpecialTrack(id="Single", station_code="UV", translation="1"),
    SpecialTrack(id="0", station_code="NA", translation="A"),
    SpecialTrack(id="4", station_code="TS", translation="E"),
    SpecialTrack(id="2", station_code="TS", translation="F"),
    SpecialTrack(id="3", station_code="TS", translation="H"),
    SpecialTrack(id="1", station_code="TS", translation="G"),
    SpecialTrack(id="Single", station_code="ST", translation="S"),
)

STATION_POSITIONS: tuple[StationPosition, ...] = (
    StationPosition(code="0", description="First station"),
    StationPosition(code="1", description="Intermediate station"),
    StationPosition(code="2", description="Final station"),
)

STOP_CODES: tuple[StopCode, ...] = (
    StopCode(code="A", description="Arrival time"),
    StopCode(code="S", description="Normal Stop"),
    StopCode(code="S*", description="Normal stop. May leave up to 3 minutes early"),
    StopCode(code="LV", description="Leaves 1 minute after scheduled time"),
    StopCode(code="L", description="Train can leave before scheduled departure. Will hold for connections"),
    StopCode(code="H", description="Will hold for connection unless authorize by dispatcher"),
    StopCode(code="D", description="Stop to discharge passengers only. May leave ahead of schedule"),
    StopCode(code="R", description="Stop to receive passengers only"),
    StopCode(code="R*", description="Stop to receive passengers only. May leave 3 minutes early"),
    StopCode(code="E", description="Employee stop. May leave ahead of schedule"),
)

STATIONS: tuple[Station, ...] = (
    Station(code="AM", name="Aberdeen-Matawan", short_name="Matawan"),
    Station(code="AB", name="Absecon", short_name="Absecon"),
    Station(code="AZ", name="Allendale", short_name="Allendale"),
    Station(code="AH", name="Allenhurst", short_name="Allenhurst"),
    Station(code="AS", name="Anderson Street", short_name="Anderson St."),
    Station(code="AN", name="Annandale", short_name="Annandale"),
    Station(code="AP", name="Asbury Park", short_name="Asbury Park"),
    Station(code="AO", name="Atco", short_name="Atco"),
    Station(code="AC", name="Atlantic City Rail Terminal", short_name="Atlantic City"),
    Station(code="AV", name="Avenel", short_name="Avenel"),
    Station(code="BA", name="BWI Thurgood Marshall Airport", short_name="BWI Airport"),
    Station(code="BL", name="Baltimore Station", short_name="Baltimore"),
    Station(code="BI", name="Basking Ridge", short_name="Basking Ridge"),
    Station(code="BH", name="Bay Head", short_name="Bay Head"),
    Station(code="MC", name="Bay Street", short_name="Bay Street"),
    Station(code="BS", name="Belmar", short_name="Belmar"),
    Station(code="BY", name="Berkeley Heights", short_name="Berkeley Hts"),
    Station(code="BV", name="Bernardsville", short_name="Bernardsville"),
    Station(code="BM", name="Bloomfield", short_name="Bloomfield"),
    Station(code="BN", name="Boonton", short_name="Boonton"),
    Station(code="BK", name="Bound Brook", short_name="Bound Brook"),
    Station(code="BB", name="Bradley Beach", short_name="Bradley Beach"),
    Station(code="BU", name="Brick Church", short_name="Brick Church"),
    Station(code="BW", name="Bridgewater", short_name="Bridgewater"),
    Station(code="BF", name="Broadway Fair Lawn", short_name="Broadway-Fl"),
    Station(code="CB", name="Campbell Hall", short_name="Campbell Hall"),
    Station(code="CM", name="Chatham", short_name="Chatham"),
    Station(code="CY", name="Cherry Hill", short_name="Cherry Hill"),
    Station(code="IF", name="Clifton", short_name="Clifton"),
    Station(code="CN", name="Convent Station", short_name="Convent Stn"),
    Station(code="XC", name="Cranford", short_name="Cranford"),
    Station(code="DL", name="Delawanna", short_name="Delawanna"),
    Station(code="DV", name="Denville", short_name="Denville"),
    Station(code="DO", name="Dover", short_name="Dover"),
    Station(code="DN", name="Dunellen", short_name="Dunellen"),
    Station(code="EO", name="East Orange", short_name="East Orange"),
    Station(code="ED", name="Edison", short_name="Edison"),
    Station(code="EH", name="Egg Harbor City", short_name="Egg Harbor"),
    Station(code="EL", name="Elberon", short_name="Elberon"),
    Station(code="EZ", name="Elizabeth", short_name="Elizabeth"),
    Station(code="EN", name="Emerson", short_name="Emerson"),
    Station(code="EX", name="Essex Street", short_name="Essex Street"),
    Station(code="FW", name="Fanwood", short_name="Fanwood"),
    Station(code="FH", name="Far Hills", short_name="Far Hills"),
    Station(code="FE", name="Finderne", short_name="Finderne"),
    Station(code="GD", name="Garfield", short_name="Garfield"),
    Station(code="GW", name="Garwood", short_name="Garwood"),
    Station(code="GI", name="Gillette", short_name="Gillette"),
    Station(code="GL", name="Gladstone", short_name="Gladstone"),
    Station(code="GG", name="Glen Ridge", short_name="Glen Ridge"),
    Station(code="GK", name="Glen Rock Boro Hall", short_name="Glen Rock Boro"),
    Station(code="RS", name="Glen Rock Main Line", short_name="Glen Rock Main"),
    Station(code="GA", name="Great Notch", short_name="Great Notch"),
    Station(code="HQ", name="Hackettstown", short_name="Hackettstown"),
    Station(code="HL", name="Hamilton", short_name="Hamilton"),
    Station(code="HN", name="Hammonton", short_name="Hammonton"),
    Station(code="RM", name="Harriman", short_name="Harriman"),
    Station(code="HW", name="Hawthorne", short_name="Hawthorne"),
    Station(code="HZ", name="Hazlet", short_name="Hazlet"),
    Station(code="HG", name="High Bridge", short_name="High Bridge"),
    Station(code="HI", name="Highland Avenue", short_name="Highland Ave."),
    Station(code="HD", name="Hillsdale", short_name="Hillsdale"),
    Station(code="HB", name="Hoboken", short_name="Hoboken"),
    Station(code="UF", name="Hohokus", short_name="Hohokus"),
    Station(code="JA", name="Jersey Avenue", short_name="Jersey Ave."),
    Station(code="KG", name="Kingsland", short_name="Kingsland"),
    Station(code="HP", name="Lake Hopatcong", short_name="Lake Hopatcong"),
    Station(code="ON", name="Lebanon", short_name="Lebanon"),
    Station(code="LP", name="Lincoln Park", short_name="Lincoln Park"),
    Station(code="LI", name="Linden", short_name="Linden"),
    Station(code="LW", name="Lindenwold", short_name="Lindenwold"),
    Station(code="FA", name="Little Falls", short_name="Little Falls"),
    Station(code="LS", name="Little Silver", short_name="Little Silver"),
    Station(code="LB", name="Long Branch", short_name="Long Branch"),
    Station(code="LN", name="Lyndhurst", short_name="Lyndhurst"),
    Station(code="LY", name="Lyons", short_name="Lyons"),
    Station(code="MA", name="Madison", short_name="Madison"),
    Station(code="MZ", name="Mahwah", short_name="Mahwah"),
    Station(code="SQ", name="Manasquan", short_name="Manasquan"),
    Station(code="MW", name="Maplewood", short_name="Maplewood"),
    Station(code="XU", name="Meadowlands", short_name="Meadowlands"),
    Station(code="MP", name="Metropark", short_name="Metropark"),
    Station(code="MU", name="Metuchen", short_name="Metuchen"),
    Station(code="MI", name="Middletown NJ", short_name="Middletown NJ"),
    Station(code="MD", name="Middletown NY", short_name="Middletown NY"),
    Station(code="MB", name="Millburn", short_name="Millburn"),
    Station(code="GO", name="Millington", short_name="Millington"),
    Station(code="MK", name="Monmouth Park", short_name="Monmouth Park"),
    Station(code="HS", name="Montclair Heights", short_name="Montclair Hts."),
    Station(code="UV", name="Montclair State U", short_name="MSU"),
    Station(code="ZM", name="Montvale", short_name="Montvale"),
    Station(code="MX", name="Morris Plains", short_name="Morris Plains"),
    Station(code="MR", name="Morristown", short_name="Morristown"),
    Station(code="HV", name="Mount Arlington", short_name="Mt. Arlington"),
    Station(code="OL", name="Mount Olive", short_name="Mount Olive"),
    Station(code="TB", name="Mount Tabor", short_name="Mount Tabor"),
    Station(code="MS", name="Mountain Avenue", short_name="Mountain Ave"),
    Station(code="ML", name="Mountain Lakes", short_name="Mountain Lakes"),
    Station(code="MT", name="Mountain Station", short_name="Mountain Stn"),
    Station(code="MV", name="Mountain View", short_name="Mountain View"),
    Station(code="MH", name="Murray Hill", short_name="Murray Hill"),
    Station(code="NN", name="Nanuet", short_name="Nanuet"),
    Station(code="NT", name="Netcong", short_name="Netcong"),
    Station(code="NE", name="Netherwood", short_name="Netherwood"),
    Station(code="NH", name="New Bridge Landing", short_name="New Bridge Ldg"),
    Station(code="NB", name="New Brunswick", short_name="New Brunswick"),
    Station(code="NC", name="New Carrollton Station", short_name="New Carrollton"),
    Station(code="NV", name="New Providence", short_name="New Providence"),
    Station(code="NY", name="New York Penn Station", short_name="New York"),
    Station(code="NA", name="Newark Airport", short_name="Newark Airport"),
    Station(code="ND", name="Newark Broad Street", short_name="Newark Broad"),
    Station(code="NP", name="Newark Penn Station", short_name="Newark Penn"),
    Station(code="OR", name="North Branch", short_name="North Branch"),
    Station(code="NZ", name="North Elizabeth", short_name="North Elizab."),
    Station(code="NF", name="North Philadelphia", short_name=""),
    Station(code="OD", name="Oradell", short_name="Oradell"),
    Station(code="OG", name="Orange", short_name="Orange"),
    Station(code="OS", name="Otisville", short_name="Otisville"),
    Station(code="PV", name="Park Ridge", short_name="Park Ridge"),
    Station(code="PS", name="Passaic", short_name="Passaic"),
    Station(code="RN", name="Paterson", short_name="Paterson"),
    Station(code="PC", name="Peapack", short_name="Peapack"),
    Station(code="PQ", name="Pearl River", short_name="Pearl River"),
    Station(code="PN", name="Pennsauken", short_name="Pennsauken"),
    Station(code="PE", name="Perth Amboy", short_name="Perth Amboy"),
    Station(code="PH", name="Philadelphia", short_name="Philadelphia"),
    Station(code="PF", name="Plainfield", short_name="Plainfield"),
    Station(code="PL", name="Plauderville", short_name="Plauderville"),
    Station(code="PP", name="Point Pleasant Beach", short_name="Point Pleasant"),
    Station(code="PO", name="Port Jervis", short_name="Port Jervis"),
    Station(code="PR", name="Princeton", short_name="Princeton"),
    Station(code="PJ", name="Princeton Junction", short_name="Princeton Jct."),
    Station(code="FZ", name="Radburn Fair Lawn", short_name="Radburn-Fl"),
    Station(code="RH", name="Rahway", short_name="Rahway"),
    Station(code="RY", name="Ramsey Main St", short_name="Ramsey"),
    Station(code="17", name="Ramsey Route 17", short_name="Ramsey Rt 17"),
    Station(code="RA", name="Raritan", short_name="Raritan"),
    Station(code="RB", name="Red Bank", short_name="Red Bank"),
    Station(code="RW", name="Ridgewood", short_name="Ridgewood"),
    Station(code="RG", name="River Edge", short_name="River Edge"),
    Station(code="RL", name="Roselle Park", short_name="Roselle Park"),
    Station(code="RF", name="Rutherford", short_name="Rutherford"),
    Station(code="CW", name="Salisbury Mills-Cornwall", short_name="Salisbury Mls"),
    Station(code="SC", name="Secaucus Concourse", short_name=""),
    Station(code="TS", name="Secaucus Lower Lvl", short_name="Secaucus"),
    Station(code="SE", name="Secaucus Upper Lvl", short_name="Secaucus"),
    Station(code="RT", name="Short Hills", short_name="Short Hills"),
    Station(code="XG", name="Sloatsburg", short_name="Sloatsburg"),
    Station(code="SM", name="Somerville", short_name="Somerville"),
    Station(code="CH", name="South Amboy", short_name="South Amboy"),
    Station(code="SO", name="South Orange", short_name="South Orange"),
    Station(code="LA", name="Spring Lake", short_name="Spring Lake"),
    Station(code="SV", name="Spring Valley", short_name="Spring Valley"),
    Station(code="SG", name="Stirling", short_name="Stirling"),
    Station(code="SF", name="Suffern", short_name="Suffern"),
    Station(code="ST", name="Summit", short_name="Summit"),
    Station(code="TE", name="Teterboro", short_name="Teterboro"),
    Station(code="TO", name="Towaco", short_name="Towaco"),
    Station(code="TR", name="Trenton", short_name="Trenton"),
    Station(code="TC", name="Tuxedo", short_name="Tuxedo"),
    Station(code="US", name="Union", short_name="Union"),
    Station(code="UM", name="Upper Montclair", short_name="Upp. Montclair"),
    Station(code="WK", name="Waldwick", short_name="Waldwick"),
    Station(code="WA", name="Walnut Street", short_name="Walnut Street"),
    Station(code="WS", name="Washington Station", short_name="Washington"),
    Station(code="WG", name="Watchung Avenue", short_name="Watchung Ave."),
    Station(code="WT", name="Watsessing Avenue", short_name="Watsessing Ave"),
    Station(code="23", name="Wayne-Route 23", short_name="Wayne Route 23"),
    Station(code="WM", name="Wesmont", short_name="Wesmont"),
    Station(code="WF", name="Westfield", short_name="Westfield"),
    Station(code="WW", name="Westwood", short_name="Westwood"),
    Station(code="WH", name="White House", short_name="White House"),
    Station(code="WI", name="Wilmington Station", short_name="Wilmington"),
    Station(code="WR", name="Wood Ridge", short_name="Wood-Ridge"),
    Station(code="WB", name="Woodbridge", short_name="Woodbridge"),
    Station(code="WL", name="Woodcliff Lake", short_name="Woodcliff Lake"),
)

# Alternative spellings seen in API payloads, used for lookup only
STATION_ALIASES: dict[str, tuple[str, ...]] = {
    "AC": ("Atlantic City Terminal",),
    "BA": ("B.W.I. Airport",),
    "MC": ("Bay Street (Montclair)",),
    "BF": ("Broadway",),
    "CN": ("Convent",),
    "ED": ("Edison Station",),
    "FE": ("Manville-Finderne",),
    "GK": ("Glen Rock (Boro Hall)",),
    "RS": ("Glen Rock (Main Line)",),
    "RM": ("Harriman Station",),
    "UF": ("Ho-Ho-Kus",),
    "MI": ("Middletown",),
    "MD": ("Middletown, NY",),
    "UV": ("Montclair State University",),
    "MT": ("Mountain Sta.",),
    "ND": ("Newark Broad St.", "Newark Broad St"),
    "NA": ("Newark Int'l Airport", "Newark Airport Railroad Station"),
    "NY": ("Penn Station New York",),
    "PN": ("Pennsauken Transit Center",),
    "PH": ("Philadelphia 30th St.", "30th St. Phl."),
    "PR": ("Princeton Station",),
    "FZ": ("Radburn",),
    "17": ("Route 17 Station", "Ramsey Route 17 Station"),
    "CW": ("Salisbury Mills",),
    "TS": ("Secaucus Junction", "Frank R Lautenberg Secaucus Lower Level"),
    "SE": ("Secaucus Station", "Frank R Lautenberg Secaucus Upper Level"),
    "TR": ("Trenton Station", "Trenton Transit Center"),
    "US": ("Union Station",),
    "WA": ("Walnut Street (Montclair)",),
    "WT": ("Watsessing Avenue (Bloomfield)",),
    "23": ("Wayne/Route 23 Transit Center [RR]",),
}

LINES: tuple[Line, ...] = (
    Line(
        code="AC", name="Atlantic City Line", abbreviation="ACRL",
        color=Color.parse_html("#075AAA"), other_abbrs=("ATLC",),
    ),
    Line(
        code="MC", name="Montclair-Boonton Line", abbreviation="MOBO",
        color=Color.parse_html("#E66859"), other_abbrs=("BNTN", "BNTNM", "MNBTN"),
    ),
    Line(
        code="BC", name="Bergen County Line", abbreviation="BERG",
        color=Color.parse_html("#FFD411"), other_abbrs=("MNBN",),
    ),
    Line(
        code="ML", name="Main Line", abbreviation="MAIN",
        color=Color.parse_html("#FFD411"), other_abbrs=("MNBN",),
    ),
    Line(
        code="ME", name="Morris & Essex Line", abbreviation="M&E",
        color=Color.parse_html("#08A652"), other_abbrs=("MNE",),
    ),
    Line(
        code="GS", name="Gladstone Branch", abbreviation="M&E",
        color=Color.parse_html("#A4C9AA"), other_abbrs=("MNEG",),
    ),
    Line(
        code="NE", name="Northeast Corridor Line", abbreviation="NEC",
        color=Color.parse_html("#DD3439"),
    ),
    Line(
        code="NC", name="North Jersey Coast Line", abbreviation="NJCL",
        color=Color.parse_html("#03A3DF"), other_abbrs=("NJCLL",),
    ),
    Line(
        code="PV", name="Pascack Valley Line", abbreviation="PASC",
        color=Color.parse_html("#94219A"),
    ),
    Line(
        code="PR", name="Princeton Branch", abbreviation="PRIN",
        color=Color.parse_html("#DD3439"),
    ),
    Line(
        code="RV", name="Raritan Valley Line", abbreviation="RARV",
        color=Color.parse_html("#F2A537"),
    ),
    Line(
        code="SL", name="BetMGM Meadowlands", abbreviation="BMGM",
        color=Color.parse_html("#C1AA72"),
    ),
    Line(
        code="AM", name="Amtrak", abbreviation="AMTK",
        color=Color.parse_html("#FFFF00"),
    ),
    Line(
        code="SP", name="Septa", abbreviation="SEPTA",
        color=Color.parse_html("#1F4FA3"),
    ),
)

LINE_ALIASES: dict[str, tuple[str, ...]] = {
    "AC": ("Atlantic City Rail Line", "Atl. City Line"),
    "MC": ("Montclair-Boonton",),
    "BC": ("Main/Bergen County Line", "Bergen Co. Line"),
    "ML": ("Port Jervis Line",),
    "ME": ("Morristown Line",),
    "NE": ("Northeast Corridor", "Northeast Corrdr"),
    "NC": ("No Jersey Coast",),
    "PV": ("Pascack Valley",),
    "PR": ("Princeton Shuttle",),
    "RV": ("Raritan Valley",),
}
