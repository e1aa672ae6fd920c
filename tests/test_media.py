import pytest
from portfolio.media import (resolve_media_url, resolve_media_urls, is_local_file, is_drive_file,
                             extract_drive_file_id, get_embed_url, get_video_thumbnail)


def test_drive_id_resolves_by_type():
    assert resolve_media_url('drive://ABC123', type='image') == 'https://lh3.googleusercontent.com/d/ABC123'
    assert resolve_media_url('drive://ABC123', type='pdf') == 'https://drive.google.com/file/d/ABC123/preview'
    assert resolve_media_url('drive://ABC123', type='video') == 'https://drive.google.com/file/d/ABC123/preview'


def test_image_is_the_default_type():
    assert resolve_media_url('drive://ABC123') == 'https://lh3.googleusercontent.com/d/ABC123'


def test_local_prefix_is_stripped():
    assert resolve_media_url('local:/images/a.jpg') == '/images/a.jpg'


@pytest.mark.parametrize('media_type', ['image', 'pdf', 'video'])
def test_direct_urls_pass_through(media_type):
    assert resolve_media_url('https://example.com/x.png', type=media_type) == 'https://example.com/x.png'


def test_share_links_are_rewritten():
    assert (resolve_media_url('https://drive.google.com/file/d/XYZ_9-a/view?usp=sharing')
            == 'https://lh3.googleusercontent.com/d/XYZ_9-a')
    assert (resolve_media_url('https://drive.google.com/open?id=XYZ', type='pdf')
            == 'https://drive.google.com/file/d/XYZ/preview')
    assert (resolve_media_url('https://drive.google.com/uc?export=view&id=XYZ')
            == 'https://lh3.googleusercontent.com/d/XYZ')


def test_id_parameter_only_counts_on_drive_host():
    url = 'https://example.com/image?id=XYZ'
    assert resolve_media_url(url) == url


def test_first_matching_rule_wins():
    # the local prefix is checked before any drive pattern
    assert resolve_media_url('local:/file/d/ABC/view') == '/file/d/ABC/view'


@pytest.mark.parametrize('reference, media_type', [
    ('drive://ABC123', 'image'),
    ('drive://ABC123', 'pdf'),
    ('https://drive.google.com/open?id=ABC123', 'video'),
    ('https://example.com/x.png', 'image'),
])
def test_resolving_twice_changes_nothing(reference, media_type):
    once = resolve_media_url(reference, type=media_type)
    assert resolve_media_url(once, type=media_type) == once


@pytest.mark.parametrize('empty', ['', None, 1, {'x': 1}])
def test_empty_input_gives_empty_string(empty):
    assert resolve_media_url(empty) == ''


def test_unknown_type_is_rejected():
    with pytest.raises(ValueError):
        resolve_media_url('drive://ABC', type='audio')


def test_batch_resolution():
    assert resolve_media_urls(['local:/a.png', 'drive://B']) == ['/a.png', 'https://lh3.googleusercontent.com/d/B']
    assert resolve_media_urls(None) == []


def test_reference_helpers():
    assert is_local_file('local:/a.png')
    assert not is_local_file('https://example.com/a.png')
    assert is_drive_file('drive://A')
    assert is_drive_file('https://drive.google.com/file/d/A/view')
    assert not is_drive_file('https://example.com/a.png')
    assert extract_drive_file_id('drive://A1') == 'A1'
    assert extract_drive_file_id('https://drive.google.com/file/d/A2/view') == 'A2'
    assert extract_drive_file_id('https://drive.google.com/open?id=A3') == 'A3'
    assert extract_drive_file_id('https://example.com/a.png') is None


def test_embed_urls():
    assert get_embed_url('https://www.youtube.com/watch?v=dQw4w9WgXcQ') == 'https://www.youtube.com/embed/dQw4w9WgXcQ'
    assert get_embed_url('https://youtu.be/dQw4w9WgXcQ') == 'https://www.youtube.com/embed/dQw4w9WgXcQ'
    assert get_embed_url('https://vimeo.com/123456') == 'https://player.vimeo.com/video/123456'
    assert (get_embed_url('https://www.dailymotion.com/video/x7abc')
            == 'https://www.dailymotion.com/embed/video/x7abc')
    assert (get_embed_url('https://drive.google.com/open?id=VID')
            == 'https://drive.google.com/file/d/VID/preview')
    assert get_embed_url('https://cdn.example.com/clip.mp4') == 'https://cdn.example.com/clip.mp4'
    assert get_embed_url('') == ''


def test_embed_urls_are_stable():
    for url in ('https://www.youtube.com/embed/dQw4w9WgXcQ', 'https://player.vimeo.com/video/123456',
                'https://www.dailymotion.com/embed/video/x7abc'):
        assert get_embed_url(url) == url


def test_video_thumbnail():
    assert (get_video_thumbnail('https://youtu.be/dQw4w9WgXcQ')
            == 'https://img.youtube.com/vi/dQw4w9WgXcQ/maxresdefault.jpg')
    assert get_video_thumbnail('https://vimeo.com/123456') == ''
    assert get_video_thumbnail(None) == ''
