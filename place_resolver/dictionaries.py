# place_resolver/dictionaries.py
"""
Static vocabularies used by the normalizer, blocking detector and generic-name
classifier.

Every table here is built once at import time and exposed read-only
(`MappingProxyType`, `tuple`, `frozenset`), so they can be shared freely
between components and worker processes.
"""

from types import MappingProxyType
from typing import Mapping, Tuple

# ======================================================================================
# Alias Dictionary
# ======================================================================================

# Multi-word phrases, expanded before single words. Identity entries are kept
# as canonical phrases so they show up in the dictionary statistics.
MULTI_WORD_ALIASES: Tuple[Tuple[str, str], ...] = (
    # Medical / care
    ('tb hospital', 'tuberculosis sanatorium'),
    ('tb san', 'tuberculosis sanatorium'),
    ('insane asylum', 'mental hospital'),
    ('lunatic asylum', 'mental hospital'),
    ('state hospital', 'state psychiatric hospital'),
    ('poor house', 'poorhouse'),
    ('alms house', 'almshouse'),
    ('childrens home', 'childrens home'),
    # Educational
    ('high school', 'high school'),
    ('jr high', 'junior high school'),
    ('middle school', 'middle school'),
    ('vocational school', 'vocational school'),
    ('elementary school', 'elementary school'),
    # Commercial / civic
    ('post office', 'post office'),
    ('court house', 'courthouse'),
    ('opera house', 'opera house'),
    ('fair grounds', 'fairgrounds'),
    ('race track', 'racetrack'),
    ('stock yards', 'stockyards'),
    # Corporate
    ('general electric', 'general electric'),
    ('general motors', 'general motors'),
    ('radio corporation america', 'radio corporation america'),
    ('international business machines', 'international business machines'),
    ('american telephone telegraph', 'american telephone telegraph'),
    ('bell telephone', 'bell telephone'),
    ('western electric', 'western electric'),
    ('union carbide', 'union carbide'),
    ('bethlehem steel', 'bethlehem steel'),
    ('us steel', 'united states steel'),
    ('united states steel', 'united states steel'),
    ('eastman kodak', 'eastman kodak'),
    ('dow chemical', 'dow chemical'),
    ('goodyear tire', 'goodyear tire'),
    ('firestone tire', 'firestone tire'),
    ('goodrich tire', 'goodrich tire'),
    ('champion spark plug', 'champion spark plug'),
    ('ac spark plug', 'ac spark plug'),
    ('delco electronics', 'delco electronics'),
    ('fisher body', 'fisher body'),
    # Railroad
    ('pennsylvania railroad', 'pennsylvania railroad'),
    ('new york central', 'new york central'),
    ('baltimore ohio', 'baltimore ohio'),
    ('erie railroad', 'erie railroad'),
    ('delaware lackawanna', 'delaware lackawanna'),
    ('lehigh valley', 'lehigh valley'),
    ('reading railroad', 'reading railroad'),
    ('southern railway', 'southern railway'),
    ('northern pacific', 'northern pacific'),
    ('southern pacific', 'southern pacific'),
    ('union pacific', 'union pacific'),
    ('santa fe', 'santa fe'),
    ('burlington railroad', 'burlington railroad'),
    ('milwaukee road', 'milwaukee road'),
    ('great northern', 'great northern'),
    ('canadian pacific', 'canadian pacific'),
    ('canadian national', 'canadian national'),
    # Automotive
    ('ford motor', 'ford motor'),
    ('general motors truck', 'general motors truck'),
    ('american motors', 'american motors'),
    ('hudson motor', 'hudson motor'),
    ('nash motors', 'nash motors'),
    ('kaiser motors', 'kaiser motors'),
    ('willys overland', 'willys overland'),
    # Military
    ('air force base', 'air force base'),
    ('naval air station', 'naval air station'),
    ('army base', 'army base'),
    ('national guard armory', 'national guard armory'),
    # Utilities
    ('power plant', 'power plant'),
    ('power house', 'powerhouse'),
    ('generating station', 'generating station'),
    ('pumping station', 'pumping station'),
    ('water works', 'waterworks'),
    ('sewage treatment plant', 'sewage treatment plant'),
    ('gas works', 'gasworks'),
    # Industrial and other site types
    ('grain elevator', 'grain elevator'),
    ('freight depot', 'freight depot'),
    ('packing plant', 'packing plant'),
    ('canning factory', 'canning factory'),
    ('textile mill', 'textile mill'),
    ('cotton mill', 'cotton mill'),
    ('woolen mill', 'woolen mill'),
    ('paper mill', 'paper mill'),
    ('lumber mill', 'lumber mill'),
    ('iron foundry', 'iron foundry'),
    ('coal mine', 'coal mine'),
    ('coal breaker', 'coal breaker'),
    ('mine tipple', 'mine tipple'),
    ('mine shaft', 'mine shaft'),
    ('stone quarry', 'stone quarry'),
    ('gravel pit', 'gravel pit'),
    ('dairy farm', 'dairy farm'),
    ('grange hall', 'grange hall'),
    ('swimming pool', 'swimming pool'),
    ('county jail', 'county jail'),
    ('state prison', 'state prison'),
    ('medical center', 'medical center'),
    ('nursing home', 'nursing home'),
    ('orphan asylum', 'orphan asylum'),
)

SINGLE_WORD_ALIASES: Mapping[str, str] = MappingProxyType({
    # Educational
    'elem': 'elementary', 'hs': 'high school', 'highschool': 'high school',
    'jhs': 'junior high', 'ms': 'middle school', 'univ': 'university',
    'coll': 'college', 'acad': 'academy', 'inst': 'institute', 'sem': 'seminary',
    'voc': 'vocational', 'tech': 'technical',
    # Medical / care
    'hosp': 'hospital', 'san': 'sanatorium', 'sanat': 'sanatorium',
    'psych': 'psychiatric', 'infirm': 'infirmary', 'med': 'medical',
    'ctr': 'center', 'cntr': 'center', 'rehab': 'rehabilitation',
    'nrsg': 'nursing', 'poorhouse': 'poorhouse', 'almshouse': 'almshouse',
    'orphanage': 'orphan asylum',
    # Industrial
    'mfg': 'manufacturing', 'fac': 'factory', 'fact': 'factory', 'plt': 'plant',
    'plnt': 'plant', 'wks': 'works', 'wrks': 'works', 'fdry': 'foundry',
    'foundry': 'foundry', 'mill': 'mill', 'furn': 'furnace', 'smelt': 'smelter',
    'ref': 'refinery', 'refin': 'refinery', 'distill': 'distillery',
    'brew': 'brewery', 'packing': 'packing', 'cannery': 'canning factory',
    'textile': 'textile', 'cotton': 'cotton', 'woolen': 'woolen', 'paper': 'paper',
    'lumber': 'lumber', 'saw': 'sawmill', 'sawmill': 'sawmill', 'grain': 'grain',
    'elev': 'elevator', 'warehouse': 'warehouse', 'whse': 'warehouse',
    'depot': 'depot',
    # Mining
    'mine': 'mine', 'colliery': 'coal mine', 'shaft': 'shaft', 'breaker': 'breaker',
    'tipple': 'tipple', 'quarry': 'quarry', 'pit': 'pit',
    # Power / utilities
    'pwr': 'power', 'power': 'power', 'powerhouse': 'powerhouse',
    'gen': 'generating', 'elec': 'electric', 'hydro': 'hydroelectric',
    'sub': 'substation', 'substa': 'substation', 'pump': 'pumping', 'wtr': 'water',
    'wwtp': 'sewage treatment', 'sewage': 'sewage', 'gas': 'gas',
    # Religious
    'ch': 'church', 'chur': 'church', 'cath': 'catholic', 'meth': 'methodist',
    'presb': 'presbyterian', 'bapt': 'baptist', 'luth': 'lutheran',
    'episc': 'episcopal', 'cong': 'congregational', 'syn': 'synagogue',
    'cem': 'cemetery', 'cemy': 'cemetery', 'mem': 'memorial', 'chap': 'chapel',
    'par': 'parish',
    # Commercial / civic
    'dept': 'department', 'store': 'store', 'htl': 'hotel', 'hotel': 'hotel',
    'inn': 'inn', 'thtr': 'theater', 'theater': 'theater', 'theatre': 'theater',
    'opera': 'opera', 'hall': 'hall', 'aud': 'auditorium', 'lib': 'library',
    'museum': 'museum', 'mus': 'museum', 'ct': 'court', 'crt': 'court',
    'courthouse': 'courthouse', 'jail': 'jail', 'prison': 'prison',
    'pen': 'penitentiary', 'armory': 'armory', 'po': 'post office',
    'stn': 'station', 'sta': 'station', 'term': 'terminal',
    # Recreation
    'pk': 'park', 'park': 'park', 'pool': 'pool', 'stadium': 'stadium',
    'arena': 'arena', 'fairgrounds': 'fairgrounds', 'race': 'race',
    'racetrack': 'racetrack', 'casino': 'casino', 'resort': 'resort',
    'camp': 'camp', 'lodge': 'lodge',
    # Agricultural
    'barn': 'barn', 'silo': 'silo', 'dairy': 'dairy', 'farm': 'farm',
    'ranch': 'ranch', 'grange': 'grange', 'creamery': 'creamery',
    'stockyard': 'stockyards', 'stockyards': 'stockyards',
    'slaughter': 'slaughterhouse', 'slaughterhouse': 'slaughterhouse',
    # Military
    'afb': 'air force base', 'nas': 'naval air station', 'army': 'army',
    'ft': 'fort', 'fort': 'fort', 'arsenal': 'arsenal', 'barracks': 'barracks',
    # Automotive brands
    'chevy': 'chevrolet', 'chev': 'chevrolet', 'chevrolet': 'chevrolet',
    'cad': 'cadillac', 'caddy': 'cadillac', 'cadillac': 'cadillac',
    'olds': 'oldsmobile', 'oldsmobile': 'oldsmobile', 'pont': 'pontiac',
    'pontiac': 'pontiac', 'buick': 'buick', 'gmc': 'general motors truck',
    'ford': 'ford', 'merc': 'mercury', 'mercury': 'mercury', 'linc': 'lincoln',
    'lincoln': 'lincoln', 'chrys': 'chrysler', 'chrysler': 'chrysler',
    'plym': 'plymouth', 'plymouth': 'plymouth', 'dodge': 'dodge', 'jeep': 'jeep',
    'amc': 'american motors', 'stude': 'studebaker', 'studebaker': 'studebaker',
    'pack': 'packard', 'packard': 'packard', 'hudson': 'hudson', 'nash': 'nash',
    'kaiser': 'kaiser', 'willys': 'willys',
    # Corporate / manufacturing brands
    'ge': 'general electric', 'gm': 'general motors',
    'rca': 'radio corporation america', 'ibm': 'international business machines',
    'att': 'american telephone telegraph', 'at&t': 'american telephone telegraph',
    'bell': 'bell telephone', 'westinghouse': 'westinghouse',
    'kodak': 'eastman kodak', 'dupont': 'dupont', 'dow': 'dow chemical',
    'bethlehem': 'bethlehem steel', 'alcoa': 'aluminum company america',
    'goodyear': 'goodyear', 'firestone': 'firestone', 'bfg': 'goodrich',
    'champion': 'champion', 'delco': 'delco', 'fisher': 'fisher',
    # Railroads
    'rr': 'railroad', 'ry': 'railway', 'rwy': 'railway', 'rrd': 'railroad',
    'penn': 'pennsylvania railroad', 'prr': 'pennsylvania railroad',
    'nyc': 'new york central', 'b&o': 'baltimore ohio', 'bando': 'baltimore ohio',
    'erie': 'erie', 'lackawanna': 'lackawanna', 'lehigh': 'lehigh',
    'reading': 'reading', 'sou': 'southern', 'southern': 'southern',
    'np': 'northern pacific', 'sp': 'southern pacific', 'up': 'union pacific',
    'sf': 'santa fe', 'atsf': 'santa fe', 'cb&q': 'burlington',
    'burlington': 'burlington', 'milw': 'milwaukee', 'gn': 'great northern',
    'cpr': 'canadian pacific', 'cnr': 'canadian national',
    # Compass
    'n': 'north', 'no': 'north', 's': 'south', 'so': 'south', 'e': 'east',
    'w': 'west', 'ne': 'northeast', 'nw': 'northwest', 'se': 'southeast',
    'sw': 'southwest',
    # Common abbreviations
    'bros': 'brothers', 'corp': 'corporation', 'inc': 'incorporated',
    'co': 'company', 'ltd': 'limited', 'assn': 'association',
    'assoc': 'association', 'bldg': 'building', 'hq': 'headquarters',
    'div': 'division', 'natl': 'national', "nat'l": 'national',
    'intl': 'international', "int'l": 'international', 'amer': 'american',
    'am': 'american',
    # Geographic
    'mt': 'mount', 'mtn': 'mountain', 'lk': 'lake', 'riv': 'river', 'rvr': 'river',
    'ck': 'creek', 'crk': 'creek', 'spg': 'springs', 'spgs': 'springs',
    'fls': 'falls', 'falls': 'falls', 'hts': 'heights', 'jct': 'junction',
    'junc': 'junction', 'xing': 'crossing', 'pt': 'point', 'hbr': 'harbor',
    'cty': 'county', 'twp': 'township', 'boro': 'borough', 'vlg': 'village',
    # Street types
    'ave': 'avenue', 'blvd': 'boulevard', 'rd': 'road', 'dr': 'drive',
    'ln': 'lane', 'pl': 'place', 'cir': 'circle', 'hwy': 'highway',
    'pkwy': 'parkway', 'tpke': 'turnpike',
})

# Abbreviations recognised only when written with a trailing period, applied
# in this order. 'dr.' is a title here, while bare 'dr' is a street type.
PERIOD_ABBREVIATIONS: Tuple[Tuple[str, str], ...] = (
    ('st', 'saint'),
    ('mt', 'mount'),
    ('hosp', 'hospital'),
    ('mfg', 'manufacturing'),
    ('co', 'company'),
    ('corp', 'corporation'),
    ('inc', 'incorporated'),
    ('ave', 'avenue'),
    ('blvd', 'boulevard'),
    ('rd', 'road'),
    ('bros', 'brothers'),
    ('dept', 'department'),
    ('dr', 'doctor'),
    ('jr', 'junior'),
    ('sr', 'senior'),
)

LEADING_ARTICLES: Tuple[str, ...] = ('the', 'a', 'an')

# ======================================================================================
# Blocking Vocabulary
# ======================================================================================

DIRECTION_WORDS = frozenset({
    'north', 'south', 'east', 'west', 'upper', 'lower', 'inner', 'outer',
})

TEMPORAL_WORDS = frozenset({
    'old', 'new', 'former', 'current', 'original', 'modern', 'historic',
})

NUMBERED_WORDS = frozenset({
    'first', 'second', 'third', 'fourth', 'fifth', '1st', '2nd', '3rd', '4th', '5th',
})

# Identifier phrases such as 'building a' or 'unit 12'. One match per keyword.
IDENTIFIER_KEYWORDS: Tuple[str, ...] = (
    'building', 'unit', 'wing', 'ward', 'phase', 'section', 'block', 'lot',
)

# ======================================================================================
# Generic-Name Vocabulary
# ======================================================================================

# Single words that say what a place is but not which one.
GENERIC_NAMES = frozenset({
    'house', 'church', 'school', 'factory', 'industrial', 'industry', 'building',
    'farm', 'barn', 'mill', 'warehouse', 'store', 'shop', 'hotel', 'motel',
    'hospital', 'office', 'station', 'tower', 'plant', 'center', 'site', 'place',
    'location', 'point', 'cars', 'trains', 'trucks',
})

# Broader list for suggestion filtering, including plurals.
SUGGESTION_GENERIC_WORDS = GENERIC_NAMES | frozenset({
    'houses', 'churches', 'schools', 'farms', 'quarry', 'cabin', 'greenhouse',
    'theater', 'trails', 'trail',
})

# Region and city tokens that commonly tag along with a generic word
# ('House - CNY', 'Factory Buffalo').
REGION_WORDS = frozenset({
    'cny', 'wny', 'nny', 'eny', 'pa', 'ny', 'in', 'fingerlakes', 'buffalo',
    'syracuse', 'rochester', 'binghamton', 'pittsburgh', 'albany', 'sayre',
    'elmira', 'waterloo', 'lockport', 'cortland', 'maine', 'ohio',
})
