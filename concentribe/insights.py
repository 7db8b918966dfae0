# concentribe/insights.py
"""
Pre-generated AI insights, served when the LLM is unavailable.
Five per feed category: three trends, one analysis, one fact check.
"""
from typing import List

from .schema import Insight

# (id, type, title, content, sentiment, confidence)
_ENTRIES = {
    "technology": [
        ("tech1", "trend", "Technology Trend: AI Integration Becoming Standard",
         "Companies across industries are rapidly integrating AI to streamline operations and enhance user "
         "experiences. This trend is accelerating adoption rates and creating new market opportunities.",
         "positive", 92),
        ("tech2", "trend", "Technology Trend: Cybersecurity Threats Evolving",
         "Recent data breaches highlight the sophisticated evolution of cyber threats. Organizations are "
         "responding by increasing security budgets and implementing zero-trust architecture.",
         "negative", 89),
        ("tech3", "analysis", "The Future of Quantum Computing",
         "Quantum computing is approaching a tipping point where practical applications may soon outpace "
         "theoretical models. Industry leaders are preparing for significant computational breakthroughs "
         "within 3-5 years.",
         "positive", 84),
        ("tech4", "trend", "Technology Trend: 5G Transforming Connectivity",
         "The rollout of 5G is accelerating digital transformation across sectors. Industries are leveraging "
         "enhanced bandwidth and reduced latency to enable IoT innovations and real-time applications.",
         "positive", 90),
        ("tech5", "factCheck", "Are Social Media Algorithms Biased?",
         "Research indicates algorithmic bias exists in major social media platforms, though the extent varies "
         "by platform. Companies are implementing more transparent AI ethics policies in response to public "
         "pressure.",
         "neutral", 78),
    ],
    "health": [
        ("health1", "trend", "Health Trend: Precision Medicine Advances",
         "Healthcare is shifting toward personalized treatments based on genetic profiles. Early adopters are "
         "reporting significantly improved outcomes for complex conditions.",
         "positive", 88),
        ("health2", "trend", "Health Trend: Mental Health Awareness",
         "Workplace mental health programs are expanding rapidly as organizations recognize the connection "
         "between wellbeing and productivity. Implementation rates have doubled in the past year.",
         "positive", 86),
        ("health3", "analysis", "The Impact of Wearable Health Devices",
         "Wearable health technology is fundamentally changing preventative care approaches. Data shows users "
         "of health wearables are more likely to make positive lifestyle changes and detect health issues earlier.",
         "positive", 82),
        ("health4", "trend", "Health Trend: Antibiotic Resistance Concerns",
         "The growing threat of antibiotic-resistant bacteria is prompting new research initiatives. Scientists "
         "are exploring alternative treatments including bacteriophage therapy and antimicrobial peptides.",
         "negative", 91),
        ("health5", "factCheck", "Do Plant-Based Diets Improve Health Outcomes?",
         "Multiple long-term studies confirm plant-based diets correlate with reduced risk of cardiovascular "
         "disease and certain cancers. Benefits are most pronounced when processed foods are limited regardless "
         "of diet type.",
         "positive", 85),
    ],
    "business": [
        ("business1", "trend", "Business Trend: Sustainable Investments Rising",
         "ESG-focused investments are outperforming traditional portfolios in multiple markets. Companies with "
         "strong sustainability practices are attracting premium valuations from investors.",
         "positive", 87),
        ("business2", "trend", "Business Trend: Supply Chain Restructuring",
         "Global businesses are diversifying suppliers and reshoring critical operations to mitigate disruption "
         "risks. This shift is creating new regional manufacturing hubs and logistics networks.",
         "neutral", 89),
        ("business3", "analysis", "The Rise of Decentralized Finance",
         "DeFi platforms are challenging traditional banking models with innovative financial products. "
         "Regulatory frameworks are evolving to address this rapidly growing sector while protecting consumers.",
         "positive", 83),
        ("business4", "trend", "Business Trend: Remote Work Economics",
         "Companies are reporting mixed financial impacts from permanent remote work policies. Cost savings on "
         "physical infrastructure are being balanced against productivity and collaboration concerns.",
         "neutral", 81),
        ("business5", "factCheck", "Are Small Businesses Recovering Post-Pandemic?",
         "Data shows uneven recovery across small business sectors. Food service and retail continue to face "
         "challenges while professional services and technology sectors have largely rebounded or expanded.",
         "neutral", 84),
    ],
    "entertainment": [
        ("entertainment1", "trend", "Entertainment Trend: Streaming Platform Consolidation",
         "Major streaming services are acquiring competitors and expanding content libraries. This consolidation "
         "is reshaping how content is created, distributed and monetized globally.",
         "neutral", 88),
        ("entertainment2", "trend", "Entertainment Trend: Virtual Production Growth",
         "LED volume stages and real-time rendering are revolutionizing film and TV production. These "
         "technologies reduce costs while enabling creative possibilities previously limited to big-budget "
         "productions.",
         "positive", 86),
        ("entertainment3", "analysis", "The Globalization of Content",
         "International content is finding broader audiences through localization and culturally-aware "
         "marketing. Productions from diverse markets are consistently breaking viewing records on global "
         "platforms.",
         "positive", 85),
        ("entertainment4", "trend", "Entertainment Trend: Gaming as Social Platform",
         "Video games are evolving into comprehensive social spaces beyond pure entertainment. In-game events "
         "and persistent worlds are creating new forms of digital community and shared experience.",
         "positive", 89),
        ("entertainment5", "factCheck", "Is Traditional Cinema Attendance Declining?",
         "Box office data confirms a structural shift in theater attendance patterns. While blockbuster releases "
         "still drive significant audiences, mid-budget films increasingly find primary success through "
         "streaming platforms.",
         "negative", 83),
    ],
    "sports": [
        ("sports1", "trend", "Sports Trend: Player Data Analytics",
         "Advanced analytics are transforming player recruitment and development across major sports. Teams "
         "leveraging sophisticated data models are gaining competitive advantages in talent evaluation.",
         "positive", 90),
        ("sports2", "trend", "Sports Trend: Athlete Mental Health Focus",
         "Professional leagues are implementing comprehensive mental health resources for athletes. This shift "
         "represents a significant cultural change in how athletic performance is understood and supported.",
         "positive", 87),
        ("sports3", "analysis", "The Evolution of Sports Broadcasting",
         "Digital platforms are creating personalized viewing experiences through interactive features and "
         "multiple camera angles. Traditional broadcasters are adapting by incorporating similar technologies "
         "into their coverage.",
         "positive", 84),
        ("sports4", "trend", "Sports Trend: Esports Going Mainstream",
         "Major traditional sports organizations are launching esports divisions and partnerships. Viewership "
         "demographics show significant audience overlap between traditional and electronic competitive sports.",
         "positive", 88),
        ("sports5", "factCheck", "Are New Stadium Technologies Enhancing Fan Experience?",
         "Survey data indicates high satisfaction with stadium technology upgrades such as mobile ordering and "
         "augmented reality features. Venues investing in connectivity infrastructure report increased "
         "per-capita spending and attendance.",
         "positive", 82),
    ],
    "science": [
        ("science1", "trend", "Science Trend: Climate Research Advances",
         "New climate models are providing more accurate predictions of regional impacts. These refined models "
         "are helping communities develop targeted adaptation strategies based on specific local challenges.",
         "neutral", 93),
        ("science2", "trend", "Science Trend: Space Exploration Commercialization",
         "Private companies are achieving milestones previously limited to government space agencies. This "
         "commercialization is accelerating innovation and reducing costs across the space industry.",
         "positive", 89),
        ("science3", "analysis", "The CRISPR Revolution",
         "CRISPR gene editing technologies are advancing rapidly from research to clinical applications. Early "
         "therapeutic trials are showing promising results for previously untreatable genetic conditions.",
         "positive", 86),
        ("science4", "trend", "Science Trend: Renewable Energy Efficiency",
         "Solar and wind energy technologies have reached cost parity with fossil fuels in most markets. Ongoing "
         "research is focused on storage solutions to address intermittency challenges.",
         "positive", 91),
        ("science5", "factCheck", "Is Fusion Energy Becoming Commercially Viable?",
         "Recent breakthroughs in fusion research have demonstrated scientific feasibility, but commercial "
         "viability remains distant. Most experts project 15-20 years before fusion contributes meaningfully "
         "to energy grids.",
         "neutral", 84),
    ],
}

_CATALOG: List[Insight] = [
    Insight(id=i, type=t, title=title, content=content, sentiment=s, confidence=conf, category=category)
    for category, rows in _ENTRIES.items()
    for (i, t, title, content, s, conf) in rows
]


def catalog() -> List[Insight]:
    return list(_CATALOG)


def for_category(category: str) -> List[Insight]:
    return [i for i in _CATALOG if i.category == category]
