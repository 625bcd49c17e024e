"""
Bilingual (English / Arabic) coaching content used by the simulation path

Every entry is an (english, arabic) pair so the two languages stay
index-aligned wherever a list is split into ``strengths``/``strengthsAr``.
"""

from types import MappingProxyType
from typing import Mapping, Tuple

from coachvision.models.analysis import DrillPriority, MomentCategory, PlayStyle

Phrase = Tuple[str, str]

STRENGTH_PHRASES: Mapping[PlayStyle, Tuple[Phrase, ...]] = MappingProxyType({
    PlayStyle.ATTACKING: (
        ("Fast and effective attacking", "هجوم سريع وفعال"),
        ("Good off-ball movement", "حركة جيدة بدون كرة"),
        ("Strong shots from various distances", "تسديدات قوية من مسافات مختلفة"),
        ("High pressing on opponent", "ضغط عالي على المنافس"),
    ),
    PlayStyle.DEFENSIVE: (
        ("Excellent defensive organization", "تنظيم دفاعي ممتاز"),
        ("Good space coverage", "تغطية جيدة للمساحات"),
        ("Clean tackles", "تدخلات نظيفة"),
        ("High defensive awareness", "وعي دفاعي عالي"),
    ),
    PlayStyle.POSSESSION: (
        ("Excellent ball possession", "استحواذ ممتاز على الكرة"),
        ("Accurate and smart passing", "تمريرات دقيقة وذكية"),
        ("Patience in building attacks", "صبر في بناء الهجمات"),
        ("Good control of game tempo", "تحكم جيد بإيقاع اللعب"),
    ),
    PlayStyle.COUNTER: (
        ("Fast transitions", "سرعة في التحولات"),
        ("Exploiting spaces behind defense", "استغلال المساحات خلف الدفاع"),
        ("Accurate long passes", "تمريرات طويلة دقيقة"),
        ("Quick counter-attacks", "سرعة في الهجمات المرتدة"),
    ),
    PlayStyle.BALANCED: (
        ("Balance between attack and defense", "توازن بين الهجوم والدفاع"),
        ("Tactical flexibility", "مرونة تكتيكية"),
        ("High work rate", "معدل عمل عالي"),
        ("Good communication between lines", "تواصل جيد بين الخطوط"),
    ),
})

WEAKNESS_PHRASES: Mapping[PlayStyle, Tuple[Phrase, ...]] = MappingProxyType({
    PlayStyle.ATTACKING: (
        ("Weak defensive tracking back", "ضعف في التراجع الدفاعي"),
        ("Leaving spaces behind fullbacks", "ترك مساحات خلف الظهيرين"),
        ("Defensive positioning when out of possession", "التمركز الدفاعي عند فقدان الكرة"),
    ),
    PlayStyle.DEFENSIVE: (
        ("Slow in building attacks", "بطء في بناء الهجمات"),
        ("Lack of creativity in final third", "قلة الإبداع في الثلث الأخير"),
        ("Few runs beyond the striker", "قلة الانطلاقات خلف المهاجم"),
    ),
    PlayStyle.POSSESSION: (
        ("Sometimes slow decision making", "بطء في اتخاذ القرار أحياناً"),
        ("Too many horizontal passes", "تمريرات أفقية كثيرة"),
        ("Needs to improve weak foot accuracy", "يحتاج لتحسين دقة القدم الضعيفة"),
    ),
    PlayStyle.COUNTER: (
        ("Difficulty breaking organized defenses", "صعوبة في كسر الدفاعات المنظمة"),
        ("Losing the ball easily", "فقدان الكرة بسهولة"),
        ("Decision making in final third could be faster", "اتخاذ القرار في الثلث الأخير يمكن أن يكون أسرع"),
    ),
    PlayStyle.BALANCED: (
        ("Not excelling in any particular aspect", "عدم التميز في جانب معين"),
        ("Inconsistent performance", "تذبذب في الأداء"),
        ("First touch under pressure", "اللمسة الأولى تحت الضغط"),
    ),
})

TACTICAL_RECOMMENDATIONS: Mapping[PlayStyle, Tuple[Phrase, ...]] = MappingProxyType({
    PlayStyle.ATTACKING: (
        ("Continue high pressing", "استمر في الضغط العالي"),
        ("Maintain pitch width", "حافظ على عرض الملعب"),
        ("Support attacks with fullbacks", "ادعم الهجمات بالظهيرين"),
    ),
    PlayStyle.DEFENSIVE: (
        ("Maintain defensive line", "حافظ على الخط الدفاعي"),
        ("Exploit set pieces", "استغل الكرات الثابتة"),
        ("Focus on quick transitions", "ركز على التحولات السريعة"),
    ),
    PlayStyle.POSSESSION: (
        ("Maintain patience", "حافظ على الصبر"),
        ("Look for vertical passes", "ابحث عن التمريرات الرأسية"),
        ("Move the ball quickly", "حرك الكرة بسرعة"),
    ),
    PlayStyle.COUNTER: (
        ("Exploit wing speed", "استغل السرعة في الأجنحة"),
        ("Stay compact when defending", "ابق مضغوطاً عند الدفاع"),
        ("Wait for the right moment to attack", "انتظر اللحظة المناسبة للهجوم"),
    ),
    PlayStyle.BALANCED: (
        ("Read the game and adapt", "اقرأ اللعبة وتكيف"),
        ("Maintain balance", "حافظ على التوازن"),
        ("Exploit opponent weaknesses", "استغل نقاط ضعف الخصم"),
    ),
})

# (name, nameAr, duration, priority, description, descriptionAr)
DRILL_POOL: Tuple[Tuple[str, str, str, DrillPriority, str, str], ...] = (
    ("Possession drills 5v2", "تمارين الاستحواذ 5 ضد 2", "15 mins", DrillPriority.HIGH,
     "Keep the ball under numerical disadvantage for the defenders",
     "الاحتفاظ بالكرة مع تفوق عددي على المدافعين"),
    ("Quick transition drills", "تمارين التحولات السريعة", "20 mins", DrillPriority.HIGH,
     "Switch from defending to attacking within three passes",
     "التحول من الدفاع إلى الهجوم خلال ثلاث تمريرات"),
    ("Team pressing drills", "تمارين الضغط الجماعي", "15 mins", DrillPriority.MEDIUM,
     "Coordinated pressing triggers after a loss of possession",
     "إشارات ضغط منسقة بعد فقدان الكرة"),
    ("Build-up play from back", "تمارين بناء اللعب من الخلف", "20 mins", DrillPriority.MEDIUM,
     "Play out from the goalkeeper through the lines",
     "بناء اللعب من حارس المرمى عبر الخطوط"),
    ("Shooting drills", "تمارين التسديد", "15 mins", DrillPriority.HIGH,
     "Finishing from the edge of the box after a lay-off",
     "التسديد من حدود منطقة الجزاء بعد تمريرة قصيرة"),
    ("Organized defense drills", "تمارين الدفاع المنظم", "20 mins", DrillPriority.MEDIUM,
     "Hold the back line shape while shifting with the ball",
     "الحفاظ على شكل الخط الخلفي مع التحرك مع الكرة"),
    ("Weak Foot Finishing", "التسديد بالقدم الضعيفة", "15 mins", DrillPriority.HIGH,
     "Practice shooting with weak foot from various angles",
     "تمرين التسديد بالقدم الضعيفة من زوايا مختلفة"),
    ("First Touch Under Pressure", "اللمسة الأولى تحت الضغط", "10 mins", DrillPriority.LOW,
     "Receiving and controlling with defender pressure",
     "استلام والتحكم بالكرة مع ضغط المدافع"),
)

# (description, descriptionAr, category)
KEY_MOMENT_POOL: Tuple[Tuple[str, str, MomentCategory], ...] = (
    ("Excellent first touch to control long ball",
     "لمسة أولى ممتازة للسيطرة على الكرة الطويلة", MomentCategory.POSITIVE),
    ("Good acceleration to beat defender",
     "تسارع جيد لتجاوز المدافع", MomentCategory.HIGHLIGHT),
    ("Hesitation in final third - could have shot earlier",
     "تردد في الثلث الأخير - كان بالإمكان التسديد مبكراً", MomentCategory.IMPROVEMENT),
    ("Strong defensive recovery run",
     "جري دفاعي قوي لاستعادة الكرة", MomentCategory.POSITIVE),
    ("Lost possession under pressure near the touchline",
     "فقدان الكرة تحت الضغط قرب خط التماس", MomentCategory.IMPROVEMENT),
    ("Well-timed run in behind the defensive line",
     "انطلاقة في التوقيت المناسب خلف خط الدفاع", MomentCategory.HIGHLIGHT),
)

TEAM_NAMES_AR: Mapping[str, str] = MappingProxyType({
    "red": "الأحمر",
    "yellow": "الأصفر",
    "blue": "الأزرق",
    "green": "الأخضر",
    "white": "الأبيض",
    "black": "الأسود",
    "orange": "البرتقالي",
    "purple": "البنفسجي",
    "navy": "الكحلي",
    "gold": "الذهبي",
})

PLAY_STYLE_NAMES_AR: Mapping[PlayStyle, str] = MappingProxyType({
    PlayStyle.ATTACKING: "هجومي",
    PlayStyle.DEFENSIVE: "دفاعي",
    PlayStyle.POSSESSION: "استحواذي",
    PlayStyle.COUNTER: "مرتد",
    PlayStyle.BALANCED: "متوازن",
})

COACH_NOTES_TEMPLATE = (
    "{team} team shows {play_style} play style. {subject} was analysed in this {clip_kind}. "
    "Possession at {possession}%. Recommended to focus on improving {weakness}."
)

COACH_NOTES_TEMPLATE_AR = (
    "فريق {team} يظهر أسلوب لعب {play_style}. تم تحليل {subject} في هذا المقطع. "
    "نسبة الاستحواذ {possession}%. يُنصح بالتركيز على تحسين {weakness}."
)
