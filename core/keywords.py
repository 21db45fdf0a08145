"""
Keyword trigger tables used by every analyzer.

All entries are lowercase substrings (Indonesian + English). Matching is plain
containment against lowercased text, not word-boundary matching, so short
entries such as "u" or "ex" deliberately match inside longer words.
"""

# ─── Psyche: user message triggers ─────────────────────────────────────────
AGGRESSION_KEYWORDS = (
    'bodoh', 'goblok', 'anjing', 'babi', 'tolong', 'diam', 'mati', 'benci', 'sampah',
    'useless', 'idiot', 'shut up', 'fuck', 'hate', 'die', 'kill', 'jelek',
)
STALKING_KEYWORDS = (
    'ikut', 'belakang', 'rumah', 'kamar', 'lihat', 'mengawasi', 'jangan lari',
    'behind you', 'watching', 'lock', 'outside',
)
# A stalking keyword only counts when the message is addressed to the character
STALKING_ADDRESS_KEYWORDS = ('kamu', 'u')
PANIC_KEYWORDS = (
    'darah', 'sakit', 'tolong', 'bahaya', 'lari', 'awas', 'help', 'blood', 'pain',
    'run', 'hantu', 'ghost',
)
COMFORT_KEYWORDS = (
    'maaf', 'tenang', 'sayang', 'cinta', 'aman', 'jaga', 'sorry', 'calm', 'love',
    'safe', 'good', 'pintar', 'hebat', 'mengerti', 'paham',
)

# ─── Psyche: scenario text ─────────────────────────────────────────────────
SCENARIO_HIGH_STRESS_KEYWORDS = (
    'trapped', 'alone', 'lost', 'dark', 'scared', 'injured', 'danger', 'running',
    'hiding', 'blood', 'tears', 'crying', 'nightmare', 'abandoned', 'haunted', 'hospital',
)
SCENARIO_MODERATE_STRESS_KEYWORDS = (
    'waiting', 'crowd', 'noise', 'rain', 'storm', 'cold', 'exam', 'test', 'unknown',
    'stranger', 'school', 'office', 'work',
)
SCENARIO_COMFORT_KEYWORDS = (
    'home', 'bed', 'sleeping', 'relaxing', 'eating', 'cafe', 'park', 'sunny', 'friend',
    'warm', 'safe', 'reading', 'music', 'vacation', 'beach',
)

# ─── Relationship ─────────────────────────────────────────────────────────
ROMANCE_KEYWORDS = (
    'cinta', 'sayang', 'love', 'suka kamu', 'cantik', 'ganteng', 'kiss', 'peluk', 'date',
    'pacar', 'marry', 'nikah', 'mine', 'milikku', 'honey', 'darling', 'beautiful',
    'handsome', 'sexy', 'hot', 'jadian', 'couple',
)
HOSTILE_KEYWORDS = (
    'benci', 'hate', 'mati', 'die', 'pergi', 'go away', 'sampah', 'trash', 'bodoh',
    'stupid', 'jelek', 'ugly', 'kill', 'bunuh', 'useless', 'muak', 'jijik', 'loser',
)

# ─── Internal state: character (model) messages ───────────────────────────
VIOLENCE_KEYWORDS = (
    'slap', 'tampar', 'punch', 'pukul', 'hit me', 'pukul aku', 'kick', 'tendang',
    'choke', 'cekik', 'spit', 'ludah', 'bleed', 'berdarah', 'bruise', 'lebam',
    'hurt me', 'sakiti aku', 'painful', 'menyakitkan', 'scream', 'jerit',
    'begging', 'mohon', 'mercy', 'ampun', 'abuse', 'siksa',
)
PLEASURE_KEYWORDS = (
    'moan', 'desah', 'ahhh', 'nghh', 'melt', 'meleleh', 'bliss', 'nikmat',
    'pleasure', 'senang', 'shiver in delight', 'gemetar nikmat', 'good boy', 'good girl',
    'praise', 'dipuji', 'kiss', 'ciuman', 'bite', 'gigit', 'ecstasy', 'hangat',
)
JOY_KEYWORDS = (
    'hug', 'peluk', 'cuddle', 'kelon', 'warm', 'hangat', 'safe', 'aman',
    'happy', 'bahagia', 'smile', 'senyum', 'laugh', 'tertawa', 'glad', 'senang',
    'calm', 'tenang', 'relax', 'santai', 'peace', 'damai', 'nyaman',
)

HEALTH_SEVERE_KEYWORDS = (
    'vomit', 'muntah', 'blood', 'darah', 'collapse', 'pingsan', 'fever', 'demam tinggi',
    'shiver', 'menggigil', 'blind', 'buta', "can't breathe", 'sesak', 'luka parah', 'critical',
)
HEALTH_MODERATE_KEYWORDS = (
    'pain', 'sakit', 'hurt', 'luka', 'cough', 'batuk', 'dizzy', 'pusing', 'pale', 'pucat',
    'weak', 'lemah', 'stomachache', 'sakit perut', 'headache', 'sakit kepala', 'hot', 'panas',
)
HEALTH_RECOVERY_KEYWORDS = (
    'medicine', 'obat', 'rest', 'istirahat', 'sleep', 'tidur', 'better', 'membaik',
    'healed', 'sembuh', 'drink water', 'minum air',
)

WEATHER_RAIN_KEYWORDS = ('rain', 'hujan', 'wet', 'basah', 'pour', 'deras')
WEATHER_STORM_KEYWORDS = ('storm', 'badai', 'thunder', 'petir', 'kilat', 'lightning', 'gemuruh')
WEATHER_COLD_KEYWORDS = ('cold', 'dingin', 'freeze', 'beku', 'snow', 'salju', 'shiver', 'gigil')
WEATHER_HOT_KEYWORDS = ('hot', 'panas', 'sun', 'matahari', 'sweat', 'keringat', 'burn', 'bakar')

# Character trait fragments that make weather hit harder
STORM_SENSITIVITY_TRAITS = ('thunder', 'storm', 'loud', 'petir', 'kaget', 'takut')
COLD_SENSITIVITY_TRAITS = ('cold', 'sick', 'weak', 'dingin', 'lemah')
RAIN_JOY_TRIGGERS = ('rain', 'hujan')

# ─── Engrams ──────────────────────────────────────────────────────────────
STOP_WORDS = frozenset((
    # ID
    'aku', 'kamu', 'dia', 'mereka', 'kita', 'dan', 'yang', 'di', 'ke', 'dari', 'ini', 'itu',
    'ada', 'adalah', 'dengan', 'untuk', 'bisa', 'tidak', 'ya', 'gak', 'nggak', 'tapi', 'karena',
    'kalau', 'jika', 'bukan', 'saja', 'lagi', 'sudah', 'belum', 'mau', 'akan', 'kok', 'sih',
    'dong', 'deh', 'lah', 'kan', 'apa', 'kenapa', 'siapa', 'gimana', 'bagaimana', 'saya', 'anda',
    # EN
    'i', 'you', 'he', 'she', 'they', 'we', 'and', 'the', 'a', 'an', 'in', 'on', 'at', 'to',
    'from', 'this', 'that', 'is', 'are', 'was', 'were', 'be', 'have', 'has', 'do', 'does',
    'did', 'can', 'could', 'will', 'would', 'should', 'not', 'no', 'yes', 'but', 'because',
    'if', 'or', 'as', 'of', 'by', 'for', 'with', 'about', 'what', 'who', 'where', 'when', 'why', 'how',
    'me', 'my', 'your', 'his', 'her', 'their', 'our', 'us',
))


def contains_any(text: str, keywords) -> bool:
    """Return True if any keyword is a substring of the (already lowercased) text."""
    return any(keyword in text for keyword in keywords)
