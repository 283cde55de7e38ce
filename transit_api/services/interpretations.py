MAJOR_ASPECT_MEANINGS = {
    "Conjunction": "A time of new beginnings and direct manifestation of the planets' energies.",
    "Opposition": "A period of tension and awareness of polarities, requiring balance and integration.",
    "Trine": "A harmonious flow of energy, bringing ease and natural development.",
    "Square": "A challenging aspect that creates tension and requires action or change.",
    "Sextile": "An opportunity for growth and positive development through conscious effort.",
}

# Keys are body pairs in catalog order; lookups accept either order.
PLANET_COMBINATIONS = {
    ("Sun", "Moon"): "The relationship between conscious and unconscious, ego and emotions, is highlighted.",
    ("Sun", "Mercury"): "Mental clarity and communication are emphasized, especially regarding self-expression.",
    ("Sun", "Venus"): "Relationships, values, and self-worth come into focus.",
    ("Sun", "Mars"): "Energy, initiative, and personal drive are highlighted.",
    ("Sun", "Jupiter"): "Expansion, growth, and optimism are emphasized.",
    ("Sun", "Saturn"): "Structure, responsibility, and limitations are highlighted.",
    ("Sun", "Uranus"): "Sudden changes, innovation, and individuality are emphasized.",
    ("Sun", "Neptune"): "Intuition, creativity, and spiritual awareness are highlighted.",
    ("Sun", "Pluto"): "Transformation, power, and deep psychological processes are emphasized.",
    ("Moon", "Mercury"): "Emotional communication and intuitive thinking are highlighted.",
    ("Moon", "Venus"): "Emotional relationships and values are emphasized.",
    ("Moon", "Mars"): "Emotional drive and assertiveness come into focus.",
    ("Moon", "Jupiter"): "Emotional growth and optimism are highlighted.",
    ("Moon", "Saturn"): "Emotional maturity and responsibility are emphasized.",
    ("Moon", "Uranus"): "Emotional changes and breakthroughs are highlighted.",
    ("Moon", "Neptune"): "Emotional sensitivity and spiritual awareness are emphasized.",
    ("Moon", "Pluto"): "Emotional transformation and deep psychological processes are highlighted.",
    ("Mercury", "Venus"): "Communication in relationships and artistic expression are emphasized.",
    ("Mercury", "Mars"): "Mental energy and assertive communication are highlighted.",
    ("Mercury", "Jupiter"): "Expansive thinking and learning opportunities are emphasized.",
    ("Mercury", "Saturn"): "Practical thinking and structured communication are highlighted.",
    ("Mercury", "Uranus"): "Innovative thinking and sudden insights are emphasized.",
    ("Mercury", "Neptune"): "Intuitive thinking and creative communication are highlighted.",
    ("Mercury", "Pluto"): "Deep psychological insights and transformative communication are emphasized.",
    ("Venus", "Mars"): "Passion, relationships, and creative energy are highlighted.",
    ("Venus", "Jupiter"): "Expansion in relationships and abundance are emphasized.",
    ("Venus", "Saturn"): "Commitment and responsibility in relationships are highlighted.",
    ("Venus", "Uranus"): "Sudden changes in relationships and freedom are emphasized.",
    ("Venus", "Neptune"): "Romantic idealism and spiritual love are highlighted.",
    ("Venus", "Pluto"): "Intense relationships and transformation through love are emphasized.",
    ("Mars", "Jupiter"): "Expansive action and growth through initiative are highlighted.",
    ("Mars", "Saturn"): "Disciplined action and responsibility are emphasized.",
    ("Mars", "Uranus"): "Sudden action and unexpected changes are highlighted.",
    ("Mars", "Neptune"): "Intuitive action and spiritual energy are emphasized.",
    ("Mars", "Pluto"): "Transformative action and power dynamics are highlighted.",
    ("Jupiter", "Saturn"): "Balance between expansion and limitation is emphasized.",
    ("Jupiter", "Uranus"): "Sudden growth and unexpected opportunities are highlighted.",
    ("Jupiter", "Neptune"): "Spiritual growth and idealism are emphasized.",
    ("Jupiter", "Pluto"): "Growth through transformation and the use of power are highlighted.",
    ("Saturn", "Uranus"): "Tension between tradition and change is emphasized.",
    ("Saturn", "Neptune"): "Giving form to ideals, or dissolving outworn structures, is highlighted.",
    ("Saturn", "Pluto"): "Deep restructuring and endurance under pressure are emphasized.",
    ("Uranus", "Neptune"): "Collective shifts in vision and inspiration are highlighted.",
    ("Uranus", "Pluto"): "Radical transformation and upheaval are emphasized.",
    ("Neptune", "Pluto"): "Slow generational change in beliefs and values is highlighted.",
}

_FALLBACK = "The influence of this transit colours the period; watch the themes of both planets."


def get_transit_interpretation(aspect: str, transit_body: str, natal_body: str) -> str:
    meaning = MAJOR_ASPECT_MEANINGS.get(aspect)
    combo = PLANET_COMBINATIONS.get((transit_body, natal_body)) or PLANET_COMBINATIONS.get(
        (natal_body, transit_body)
    )
    if transit_body == natal_body and meaning:
        return f"{meaning} The {transit_body}'s own themes return to the foreground."
    if meaning and combo:
        return f"{meaning} {combo}"
    return meaning or combo or _FALLBACK
