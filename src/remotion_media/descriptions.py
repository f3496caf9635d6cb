# SPDX-License-Identifier: MIT
"""Tool descriptions for MCP server. Optimized for token efficiency."""

# ==================== IMAGE TOOL DESCRIPTIONS ====================

GENERATE_IMAGE = """Generate an image with Nano Banana Pro (kie.ai) and save it to public/<output_name>.png. Blocks until the file is downloaded.

Params: prompt, output_name (no extension), aspect_ratio (1:1 default|2:3|3:2|3:4|4:3|4:5|5:4|9:16|16:9|21:9|auto), resolution (1K|2K|4K), image_urls (up to 8 reference images)

Returns: path, relative_path (use with staticFile()), task_id, image_url

Example: generate_image("neon city skyline at dusk", output_name="intro-bg", aspect_ratio="16:9")"""


# ==================== VIDEO TOOL DESCRIPTIONS ====================

GENERATE_VIDEO_FROM_TEXT = """Generate a video with Veo 3.1 (kie.ai) and save it to public/<output_name>.mp4. Takes several minutes.

Params: prompt, output_name, model (veo3_fast default|veo3 quality), aspect_ratio (16:9|9:16|Auto)

Returns: path, relative_path, task_id, video_url"""

GENERATE_VIDEO_FROM_IMAGE = """Animate one image, or transition between two images (first -> last frame), with Veo 3.1.

Params: prompt, image_urls (1 or 2 public URLs), output_name, model (veo3_fast|veo3), aspect_ratio (16:9|9:16|Auto)

Returns: path, relative_path, task_id, video_url

Example: generate_video_from_image("slow zoom in", ["https://.../frame.png"], output_name="hero")"""


# ==================== AUDIO TOOL DESCRIPTIONS ====================

GENERATE_SOUND_EFFECT = """Generate a sound effect with ElevenLabs SFX V2 and save it to public/<output_name>.mp3.

Params: prompt (max 450 chars), output_name, duration_seconds (0.5-22, auto if omitted), loop (seamless loop)

Returns: path, relative_path, task_id, audio_url"""

GENERATE_MUSIC = """Generate a music track with Suno and save it to public/<output_name>.mp3. Takes a few minutes.

Params: prompt (max 500 chars), output_name, instrumental (no vocals), model (V3_5|V4|V4_5|V4_5PLUS|V5 default)

Returns: path, relative_path, task_id, audio_url, title, duration (seconds), cover_image_url"""

GENERATE_SPEECH = """Generate narration with ElevenLabs multilingual TTS and save it to public/<output_name>.mp3.

Params: text (max 5000 chars), output_name, voice (default Rachel), stability (0-1), similarity_boost (0-1), speed (0.7-1.2), language_code (ISO 639-1)

Returns: path, relative_path, task_id, audio_url"""


# ==================== TRANSCRIPTION TOOL DESCRIPTIONS ====================

TRANSCRIBE_AUDIO = """Transcribe a local audio/video file to SRT subtitles with whisper.cpp. Runs locally, downloads the model on first use.

Params: input_file (relative to public/), model_size (tiny|base default|small|medium|large-v3|large-v3-turbo, .en variants), language (ISO 639-1, auto if omitted), output_name, input_dir, output_dir, timeout_seconds

Returns: path, relative_path (subtitles/<name>.srt), input_file, model_size, language"""


# ==================== MEDIA TOOL DESCRIPTIONS ====================

LIST_GENERATED_MEDIA = """List generated files in public/ and subtitles/, grouped into images, videos, audio and subtitles.

Returns: project-relative paths per group"""


# ==================== CATALOG TOOL DESCRIPTIONS ====================

CATALOG_BACKUP_ASSET = """Back up a local file to the Airtable asset catalog. Returns its short AID (e.g. A42).

Requires AIRTABLE_API_KEY and AIRTABLE_BASE_ID; otherwise returns configured=false.

Params: filename (relative to public/), description, source_dir (optional)"""

CATALOG_LIST_ASSETS = """List catalog assets, newest first.

Params: file_type (image|video|audio|subtitle), limit (1-100, default 20), offset (cursor from previous page)

Returns: assets (aid, filename, description, mime_type, file_type, file_url), offset"""

CATALOG_GET_ASSET = """Get one catalog asset by AID.

Params: aid (e.g. "A42")"""

CATALOG_DOWNLOAD_ASSET = """Download a catalog asset's file into backups/.

Params: aid, output_name (no extension, defaults to stored filename), output_dir (optional)

Returns: aid, path, size_bytes"""
