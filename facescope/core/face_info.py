from facescope.models.face_detection import FaceInfo


def dominant_expression(expressions):
    if not expressions:
        return "unknown"
    return max(expressions.items(), key=lambda item: item[1])[0]


def format_age(age):
    return f"{float(age):.1f}"


def face_info_from_detection(detection):
    return FaceInfo(
        age=format_age(detection.age),
        gender=detection.gender,
        expression=dominant_expression(detection.expressions),
    )


def gender_label(gender):
    return {"male": "Male", "female": "Female"}.get(gender, "Unknown")
