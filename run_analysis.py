"""
run_analysis.py
===============
Master script: land-use classification of Muenster (2016, 2023) in GEE.

Stages:
  1. Region + Sentinel-2 median composites
  2. NDVI / NDBI yearly series (2016-2023)
  3. Training samples (GCPs, random split, pixel sampling)
  4. Random Forest classification
  5. Accuracy assessment
  6. Area per class
  7. Exports to Google Drive
  8. Optional: thumbnails, GeoTIFF downloads and local summaries

Every stage takes what it needs as arguments and returns its results; the
only evaluation points are the getInfo() calls made for reporting.

Usage:
    python run_analysis.py [--skip-export] [--download] [--points gcps.csv]
"""

import argparse
import os
import time
from datetime import datetime

import gee_config
from gee_config import (
    PERIODS, TIME_SERIES_YEARS, INDEX_BANDS, LULC_CLASSES, SPLIT_PARAMS, DOWNLOAD_NODATA
)
from munster_lulc.accuracy import (
    assess_classification_accuracy, compute_detailed_metrics, error_matrix_feature
)
from munster_lulc.area import calculate_landcover_areas, area_table
from munster_lulc.charts import plot_index_time_series, plot_class_areas
from munster_lulc.classification import (
    train_random_forest, classify_image, get_feature_importance, top_features
)
from munster_lulc.composites import create_sentinel2_composite, check_scene_count
from munster_lulc.export import (
    export_classified_to_drive, export_table_to_drive, download_image
)
from munster_lulc.indices import (
    compute_index, index_time_series, time_series_to_frame
)
from munster_lulc.raster_summary import (
    summarize_classified_geotiff, index_means_from_composite
)
from munster_lulc.region import get_study_area
from munster_lulc.training import (
    build_gcps, count_points, load_points_csv, sample_regions, split_train_validation, SplitRule
)
from munster_lulc.utils import (
    log, banner, save_json, safe_getinfo, set_log_file, feature_collection_to_records,
    get_lulc_vis_params, get_rgb_vis_params, get_index_vis_params, thumbnail_url
)


# ================================================================
# STAGE 1: COMPOSITES
# ================================================================

def run_composites(region, output_dir, periods=PERIODS):
    banner("STAGE 1: SENTINEL-2 MEDIAN COMPOSITES")
    composites = {}
    metadata = {}

    for period_key, period_info in periods.items():
        year = period_info['map_year']
        log(f"\n  [{year}] {period_info['start']} -> {period_info['end']} (end exclusive)")
        composite, n_images = create_sentinel2_composite(
            period_info['start'], period_info['end'], region
        )
        n_img = check_scene_count(safe_getinfo(n_images, f"n_img_{year}"), str(year))

        composites[year] = composite
        metadata[year] = {
            'period': period_key,
            'label': period_info['label'],
            'start_date': period_info['start'],
            'end_date': period_info['end'],
            'n_images': n_img,
        }

    save_json(metadata, output_dir, 'composites_metadata.json')
    return composites


# ================================================================
# STAGE 2: INDEX TIME SERIES
# ================================================================

def run_index_series(region, output_dir, years=TIME_SERIES_YEARS):
    banner("STAGE 2: NDVI / NDBI YEARLY SERIES")
    first_year, last_year = years
    frames = {}

    for index_name in INDEX_BANDS:
        log(f"  {index_name} {first_year}-{last_year}...")
        series = index_time_series(index_name, first_year, last_year, region)
        info = safe_getinfo(series, f"{index_name}_series")
        if info is None:
            log(f"  {index_name} series unavailable, skipping chart")
            continue

        df = time_series_to_frame(info, index_name)
        csv_path = os.path.join(output_dir, f'{index_name.lower()}_time_series.csv')
        df.to_csv(csv_path, index=False)
        log(f"  >> Saved: {os.path.basename(csv_path)}")
        for _, row in df.iterrows():
            log(f"    {int(row['year'])}: {row[index_name]:.4f}")

        plot_index_time_series(
            df, index_name, os.path.join(output_dir, 'figures', f'{index_name.lower()}_time_series.png')
        )
        frames[index_name] = df

    return frames


# ================================================================
# STAGE 3: TRAINING SAMPLES
# ================================================================

def run_training_samples(composites, output_dir, points=None, rule=None):
    banner("STAGE 3: TRAINING SAMPLES")
    rule = rule or SplitRule()
    gcps = build_gcps(points)
    per_class = count_points(points)
    log(f"  GCPs per class: {per_class}")

    training_gcp, validation_gcp = split_train_validation(gcps, rule)
    n_train = safe_getinfo(training_gcp.size(), "n_training_gcp")
    n_val = safe_getinfo(validation_gcp.size(), "n_validation_gcp")
    log(f"  Training GCPs: {n_train} | Validation GCPs: {n_val}")

    training_data = {}
    stats = {
        'points_per_class': per_class,
        'split': {
            'column': rule.column,
            'seed': rule.seed,
            'train_below': rule.train_below,
            'validation_from': rule.validation_from,
            'overlapping': rule.overlaps,
        },
        'n_training_gcp': n_train,
        'n_validation_gcp': n_val,
        'samples': {},
    }

    for year, composite in composites.items():
        samples = sample_regions(composite, training_gcp)
        n_samples = safe_getinfo(samples.size(), f"n_samples_{year}")
        preview = feature_collection_to_records(safe_getinfo(samples.limit(3), f"preview_{year}"))
        log(f"  [{year}] sampled training pixels: {n_samples}")
        for record in preview:
            log(f"    {record}")
        training_data[year] = samples
        stats['samples'][year] = n_samples

    save_json(stats, output_dir, 'training_samples_stats.json')
    return training_data, validation_gcp


# ================================================================
# STAGE 4: CLASSIFICATION
# ================================================================

def run_classification(composites, training_data, output_dir):
    banner("STAGE 4: RANDOM FOREST CLASSIFICATION")
    classified_maps = {}
    all_importance = {}

    for year, composite in composites.items():
        t0 = time.time()
        classifier = train_random_forest(training_data[year], composite.bandNames())
        classified_maps[year] = classify_image(composite, classifier)

        importance = safe_getinfo(get_feature_importance(classifier), f"importance_{year}")
        all_importance[year] = importance
        log(f"  [{year}] feature importance (top 5):")
        for feat, imp in top_features(importance):
            log(f"    {feat}: {imp:.2f}")
        log(f"  [{year}] done ({time.time() - t0:.1f}s)")

    save_json(all_importance, output_dir, 'feature_importance.json')
    return classified_maps


# ================================================================
# STAGE 5: ACCURACY
# ================================================================

def run_accuracy(classified_maps, validation_gcp, output_dir):
    banner("STAGE 5: ACCURACY ASSESSMENT")
    error_matrices = {}
    metrics = {}

    for year, classified in classified_maps.items():
        error_matrix = assess_classification_accuracy(classified, validation_gcp)
        year_metrics = compute_detailed_metrics(error_matrix)
        error_matrices[year] = error_matrix
        metrics[year] = year_metrics

        log(f"  Confusion Matrix {year} (rows: reference, cols: predicted)")
        for row in year_metrics['confusion_matrix']:
            log(f"    {row}")
        log(f"  Test Accuracy {year}: {year_metrics['overall_accuracy']:.4f} "
            f"| Kappa: {year_metrics['kappa']:.4f}")

    save_json(metrics, output_dir, 'classification_metrics.json')
    return error_matrices, metrics


# ================================================================
# STAGE 6: AREAS
# ================================================================

def run_areas(classified_maps, region, output_dir):
    banner("STAGE 6: AREA PER LANDCOVER CLASS")
    areas_by_year = {}

    for year, classified in classified_maps.items():
        log(f"  --- Areas for {year} ---")
        areas = calculate_landcover_areas(classified, region)
        for value in sorted(LULC_CLASSES):
            name = LULC_CLASSES[value]['name']
            log(f"    Area for {name} in {year} (SqKm): {areas.get(name)}")
        areas_by_year[year] = areas

    table = area_table(areas_by_year)
    csv_path = os.path.join(output_dir, 'landcover_areas.csv')
    table.to_csv(csv_path)
    log(f"  >> Saved: {os.path.basename(csv_path)}")
    save_json(areas_by_year, output_dir, 'landcover_areas.json')
    plot_class_areas(table, os.path.join(output_dir, 'figures', 'landcover_areas.png'))
    return areas_by_year


# ================================================================
# STAGE 7: EXPORTS
# ================================================================

def run_exports(classified_maps, error_matrices, region, folder=None):
    banner("STAGE 7: EXPORTS TO GOOGLE DRIVE")
    tasks = []
    for year, classified in classified_maps.items():
        tasks.append(export_classified_to_drive(classified, region, year, folder=folder))
        if year in error_matrices:
            tasks.append(export_table_to_drive(
                error_matrix_feature(error_matrices[year], year),
                f'ConfusionMatrix{year}_Export', folder=folder
            ))
    log(f"  {len(tasks)} export tasks started (not awaited).")
    log("  Check progress at: https://code.earthengine.google.com/tasks")
    return tasks


# ================================================================
# STAGE 8: THUMBNAILS / DOWNLOADS
# ================================================================

def run_thumbnails(composites, classified_maps, region, output_dir):
    banner("STAGE 8a: THUMBNAILS")
    urls = {}
    for year, composite in composites.items():
        urls[f'rgb_{year}'] = thumbnail_url(composite, get_rgb_vis_params(), region)
        for index_name in INDEX_BANDS:
            urls[f'{index_name.lower()}_{year}'] = thumbnail_url(
                compute_index(composite, index_name), get_index_vis_params(index_name), region
            )
        urls[f'classified_{year}'] = thumbnail_url(
            classified_maps[year], get_lulc_vis_params(), region
        )
    for name, url in urls.items():
        log(f"  {name}: {url}")
    save_json(urls, output_dir, 'thumbnails.json')
    return urls


def run_local_summary(composites, classified_maps, region, output_dir):
    banner("STAGE 8b: GEOTIFF DOWNLOADS + LOCAL SUMMARY")
    raster_dir = os.path.join(output_dir, 'rasters')
    summary = {}
    index_bands = sorted({band for pair in INDEX_BANDS.values() for band in pair})

    for year, classified in classified_maps.items():
        classified_path = download_image(
            classified.clip(region).unmask(DOWNLOAD_NODATA).toByte(),
            os.path.join(raster_dir, f'classified{year}.tif'), region
        )
        df = summarize_classified_geotiff(classified_path, nodata=DOWNLOAD_NODATA)
        df.to_csv(os.path.join(output_dir, f'local_areas_{year}.csv'), index=False)

        composite_path = download_image(
            composites[year].clip(region), os.path.join(raster_dir, f'composite{year}.tif'),
            region, bands=index_bands
        )
        summary[year] = {
            'areas_km2': dict(zip(df['class'], df['area_km2'].astype(int))),
            'index_means': index_means_from_composite(composite_path),
        }
        log(f"  [{year}] local areas: {summary[year]['areas_km2']}")
        log(f"  [{year}] local index means: {summary[year]['index_means']}")

    save_json(summary, output_dir, 'local_summary.json')
    return summary


# ================================================================
# MAIN
# ================================================================

def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        description='Land-use classification of Muenster with Sentinel-2 and Random Forest (GEE).'
    )
    parser.add_argument('--project', default=None,
                        help='GEE Cloud project (default: GEE_PROJECT_ID from .env)')
    parser.add_argument('--output-dir', default=gee_config.OUTPUT_DIR)
    parser.add_argument('--points', default=None,
                        help='CSV with lon, lat, landcover columns (default: built-in GCPs)')
    parser.add_argument('--validation-from', type=float, default=SPLIT_PARAMS['validation_from'],
                        help='Lower bound of the validation subset on the random column')
    parser.add_argument('--drive-folder', default=None)
    parser.add_argument('--skip-series', action='store_true', help='Skip NDVI/NDBI series')
    parser.add_argument('--skip-export', action='store_true', help='Do not start Drive exports')
    parser.add_argument('--thumbnails', action='store_true', help='Log thumbnail URLs')
    parser.add_argument('--download', action='store_true',
                        help='Download coarse GeoTIFFs and summarize them locally')
    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    output_dir = args.output_dir
    os.makedirs(output_dir, exist_ok=True)
    set_log_file(os.path.join(output_dir, 'logs', 'pipeline.log'))

    banner("MUENSTER LULC CLASSIFICATION")
    log(f"Run date: {datetime.now().strftime('%Y-%m-%d %H:%M')}")
    gee_config.initialize_earth_engine(args.project)
    gee_config.print_config_summary()

    points = load_points_csv(args.points) if args.points else None
    rule = SplitRule(validation_from=args.validation_from)

    t0 = time.time()
    region = get_study_area()
    composites = run_composites(region, output_dir)

    if not args.skip_series:
        run_index_series(region, output_dir)

    training_data, validation_gcp = run_training_samples(composites, output_dir, points, rule)
    classified_maps = run_classification(composites, training_data, output_dir)
    error_matrices, metrics = run_accuracy(classified_maps, validation_gcp, output_dir)
    areas = run_areas(classified_maps, region, output_dir)

    if not args.skip_export:
        run_exports(classified_maps, error_matrices, region, args.drive_folder)
    if args.thumbnails:
        run_thumbnails(composites, classified_maps, region, output_dir)
    if args.download:
        run_local_summary(composites, classified_maps, region, output_dir)

    banner(f"PIPELINE COMPLETED ({time.time() - t0:.0f}s)")
    return {'metrics': metrics, 'areas': areas}


if __name__ == '__main__':
    main()
