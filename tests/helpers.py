"""Builders for boundary test data."""


def square(minx, miny, maxx, maxy):
    """Closed square ring in (lon, lat) order, counter-clockwise."""
    return [[minx, miny], [maxx, miny], [maxx, maxy], [minx, maxy], [minx, miny]]


def feature(feature_id, jurisdiction_type, name, rings=None, multipolygon=None,
            phone=None, website=None, bbox=None):
    """GeoJSON feature in the shape boundary datasets are delivered in."""
    properties = {
        "id": feature_id,
        "jurisdiction_type": jurisdiction_type,
        "agency_name": name,
    }
    if phone is not None:
        properties["phone"] = phone
    if website is not None:
        properties["website"] = website

    if multipolygon is not None:
        geometry = {"type": "MultiPolygon", "coordinates": multipolygon}
    elif rings is not None:
        geometry = {"type": "Polygon", "coordinates": rings}
    else:
        geometry = None

    result = {"type": "Feature", "properties": properties, "geometry": geometry}
    if bbox is not None:
        result["bbox"] = bbox
    return result


def collection(*features):
    return {"type": "FeatureCollection", "features": list(features)}


def raw_record(feature_id, rings, jurisdiction_type="municipal", name="Agency", **extra):
    """Raw store record for a single polygon."""
    record = {
        "id": feature_id,
        "jurisdiction_type": jurisdiction_type,
        "agency": {"name": name, "phone": extra.pop("phone", None), "website": extra.pop("website", None)},
        "geometry": {"type": "Polygon", "coordinates": rings} if rings is not None else None,
        "bbox": extra.pop("bbox", None),
        "properties": {},
    }
    record.update(extra)
    return record
