from vaketracker.pipeline.activity_summary import summarise_activities

PROFILES = [
    {"user_id": "u1", "email": "ana@example.com", "first_name": "Ana", "last_name": "López"},
    {"user_id": "u2", "email": "beto@example.com", "first_name": None, "last_name": None},
]


def test_summary_counts_visit_types_per_profile():
    locations = [
        {"user_id": "u1", "visit_type": "Visita en frío"},
        {"user_id": "u1", "visit_type": "Visita programada - Visita técnica"},
        {"user_id": "u1", "visit_type": "Visita de cortesía"},
        {"user_id": "u1", "visit_type": None},
        {"user_id": "u2", "visit_type": "Negociación en curso"},
        {"user_id": "ghost", "visit_type": "Visita en frío"},
    ]
    summaries = summarise_activities(PROFILES, locations)

    assert [s["user_email"] for s in summaries] == ["ana@example.com", "beto@example.com"]
    ana, beto = summaries
    assert ana["total_activities"] == 4
    assert ana["visita_en_frio"] == 1
    assert ana["visita_tecnica"] == 1
    assert ana["visita_cortesia"] == 1
    assert ana["negociacion_en_curso"] == 0
    assert beto["total_activities"] == 1
    assert beto["negociacion_en_curso"] == 1
    assert beto["first_name"] == ""


def test_summary_for_profiles_without_activity():
    summaries = summarise_activities(PROFILES, [])
    assert all(s["total_activities"] == 0 for s in summaries)
    assert summaries[0]["visita_pre_entrega"] == 0
