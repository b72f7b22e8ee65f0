import os
import sys

# Ensure src is in pythonpath
sys.path.append(os.path.join(os.path.dirname(__file__), "..", "src"))

from dotenv import load_dotenv
load_dotenv()

from md_blog_server.config import settings
from md_blog_server.content.indexer import ContentIndexer, ContentRootError
from md_blog_server.content.markdown import MarkdownRenderer

def main() -> int:
    root = sys.argv[1] if len(sys.argv) > 1 else settings.content_dir
    print(f"Indexing {root} ...")

    indexer = ContentIndexer(
        root,
        route_prefix=settings.route_prefix,
        metadata_filename=settings.metadata_filename,
        body_filename=settings.body_filename,
        renderer=MarkdownRenderer(settings.markdown_profile),
    )

    try:
        index = indexer.build()
    except ContentRootError as e:
        print(f"Error: {e}")
        return 2

    # Oldest first, the order the previous/next links follow
    for post in index:
        hidden = "" if post.meta.show_in_feed else "  (hidden from feed)"
        print(f"{post.publish_dt:%Y-%m-%d %H:%M %z}  {post.path_from_root}  {post.meta.title}{hidden}")

    print(f"{len(index)} posts indexed in {index.elapsed.total_seconds() * 1000:.1f}ms.")

    if index.rejected:
        print(f"{len(index.rejected)} directories rejected:")
        for directory in index.rejected:
            print(f"  {directory}")
        return 1

    return 0

if __name__ == "__main__":
    sys.exit(main())
